import pygame
import pytest

from tetromino.game import Event, Key
from tetromino.visualization.human_play import translate


def test_window_close_quits():
    assert translate(pygame.event.Event(pygame.QUIT)) == Event.quit()


def test_escape_quits():
    assert translate(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE)) == Event.quit()


@pytest.mark.parametrize(
    "pg_key,key",
    [
        (pygame.K_LEFT, Key.LEFT),
        (pygame.K_d, Key.D),
        (pygame.K_SPACE, Key.SPACE),
        (pygame.K_p, Key.P),
    ],
)
def test_mapped_key_down(pg_key, key):
    assert translate(pygame.event.Event(pygame.KEYDOWN, key=pg_key)) == Event.key_down(key)


def test_unmapped_key_down_is_other():
    assert translate(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_RETURN)) == Event.key_down(Key.OTHER)


def test_key_up():
    assert translate(pygame.event.Event(pygame.KEYUP, key=pygame.K_DOWN)) == Event.key_up(Key.DOWN)
    assert translate(pygame.event.Event(pygame.KEYUP, key=pygame.K_RETURN)) is None


def test_other_events_are_dropped():
    assert translate(pygame.event.Event(pygame.MOUSEMOTION, pos=(0, 0), rel=(0, 0), buttons=(0, 0, 0))) is None
