from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

import pygame

from tetromino.game import Event, GameConfig, Key, StateMachine
from tetromino.game.config import FPS
from .renderer import Renderer, WINDOW_HEIGHT, WINDOW_WIDTH


KEY_MAP: Dict[int, Key] = {
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_a: Key.A,
    pygame.K_d: Key.D,
    pygame.K_w: Key.W,
    pygame.K_q: Key.Q,
    pygame.K_SPACE: Key.SPACE,
    pygame.K_p: Key.P,
}


def translate(event: pygame.event.Event) -> Optional[Event]:
    """Turn a pygame event into a state machine event, or None if it is irrelevant."""
    if event.type == pygame.QUIT:
        return Event.quit()
    if event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            return Event.quit()
        return Event.key_down(KEY_MAP.get(event.key, Key.OTHER))
    if event.type == pygame.KEYUP:
        key = KEY_MAP.get(event.key)
        return Event.key_up(key) if key is not None else None
    return None


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--fps", type=int, default=FPS)
    p.add_argument("--log-level", type=str, default="WARNING")
    return p


def run(seed: Optional[int] = None, fps: int = FPS) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        machine = StateMachine(GameConfig(random_seed=seed))
        screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption("Tetromino")
        renderer = Renderer(machine.config.board_width, machine.config.board_height)

        while machine.running:
            for pg_event in pygame.event.get():
                event = translate(pg_event)
                if event is not None:
                    machine.handle(event)
            if not machine.running:
                break

            machine.handle(Event.tick(clock.tick(fps) / 1000.0))
            _, snapshot = machine.handle(Event.render())
            if snapshot is not None:
                renderer.draw(screen, snapshot)
        print(f"Final score: {machine.game.score} (level {machine.game.level})")
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    run(seed=args.seed, fps=args.fps)


if __name__ == "__main__":  # pragma: no cover
    main()
