from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from .config import GameConfig
from .core import GameState, Key, Snapshot, Tetris

logger = logging.getLogger(__name__)


class EventKind(Enum):
    TICK = "tick"
    KEY_DOWN = "key_down"
    KEY_UP = "key_up"
    RENDER = "render"
    QUIT = "quit"


@dataclass(frozen=True)
class Event:
    kind: EventKind
    key: Optional[Key] = None
    dt: float = 0.0

    @classmethod
    def tick(cls, dt: float) -> "Event":
        return cls(EventKind.TICK, dt=dt)

    @classmethod
    def key_down(cls, key: Key) -> "Event":
        return cls(EventKind.KEY_DOWN, key=key)

    @classmethod
    def key_up(cls, key: Key) -> "Event":
        return cls(EventKind.KEY_UP, key=key)

    @classmethod
    def render(cls) -> "Event":
        return cls(EventKind.RENDER)

    @classmethod
    def quit(cls) -> "Event":
        return cls(EventKind.QUIT)


Transition = Tuple[GameState, Optional[Snapshot]]


class StateMachine:
    """Sequences the title, run, pause and game over screens around a `Tetris` game.

    The driver feeds events through `handle`; time only moves forward through
    TICK events, so the whole machine runs on simulated time and needs no clock.
    """

    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.clock = 0.0
        self.state = GameState.TITLE_SCREEN
        self.game = Tetris(self.config, rng=self.rng, now=self.clock)
        self._handlers: Dict[GameState, Callable[[Event], GameState]] = {
            GameState.TITLE_SCREEN: self._on_waiting_screen,
            GameState.RUN: self._on_run,
            GameState.PAUSED: self._on_waiting_screen,
            GameState.GAME_OVER: self._on_game_over,
        }

    @property
    def running(self) -> bool:
        return self.state != GameState.QUIT

    def snapshot(self) -> Snapshot:
        return self.game.snapshot(self.state)

    def handle(self, event: Event) -> Transition:
        if self.state == GameState.QUIT:
            return self.state, None
        if event.kind == EventKind.TICK:
            if event.dt < 0:
                raise ValueError(f"Time cannot go backwards (dt={event.dt})")
            self.clock += event.dt
        if event.kind == EventKind.QUIT:
            new_state = GameState.QUIT
        else:
            new_state = self._handlers[self.state](event)
        if new_state != self.state:
            logger.info("%s -> %s", self.state.name, new_state.name)
            self.state = new_state
        if event.kind == EventKind.RENDER:
            return self.state, self.snapshot()
        return self.state, None

    def _on_waiting_screen(self, event: Event) -> GameState:
        # Title and pause screens: any key starts (or resumes) the game.
        if event.kind != EventKind.KEY_DOWN:
            return self.state
        self.game.resume(self.clock)
        return GameState.RUN

    def _on_run(self, event: Event) -> GameState:
        if event.kind == EventKind.TICK:
            return self.game.update(self.clock)
        if event.kind == EventKind.KEY_DOWN:
            return self.game.update(self.clock, pressed=event.key)
        if event.kind == EventKind.KEY_UP:
            return self.game.update(self.clock, released=event.key)
        return self.state

    def _on_game_over(self, event: Event) -> GameState:
        if event.kind != EventKind.KEY_DOWN:
            return self.state
        self.game = Tetris(self.config, rng=self.rng, now=self.clock)
        return GameState.RUN
