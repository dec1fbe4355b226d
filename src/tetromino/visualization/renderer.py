from __future__ import annotations

from typing import Optional

import numpy as np
import pygame

from tetromino.game import GameState, Piece, Snapshot
from tetromino.game.config import BLANK
from .palette import (
    BG_COLOR,
    BORDER_COLOR,
    TEXT_COLOR,
    TEXT_SHADOW_COLOR,
    color_for_value,
)

WINDOW_WIDTH = 640
WINDOW_HEIGHT = 480
BOX_SIZE = 20

_SCREEN_TITLES = {
    GameState.TITLE_SCREEN: "Tetromino",
    GameState.PAUSED: "Paused",
    GameState.GAME_OVER: "Game Over",
}


class Renderer:
    def __init__(self, board_width: int, board_height: int, box_size: int = BOX_SIZE,
                 width: int = WINDOW_WIDTH, height: int = WINDOW_HEIGHT) -> None:
        self.box_size = box_size
        self.width = width
        self.height = height
        self.x_margin = (width - board_width * box_size) // 2
        self.top_margin = height - board_height * box_size - 5
        self.big_font = pygame.font.SysFont(None, 100)
        self.basic_font = pygame.font.SysFont(None, 18)

    def _pixel_coords(self, box_x: int, box_y: int) -> tuple[int, int]:
        return self.x_margin + box_x * self.box_size, self.top_margin + box_y * self.box_size

    def _draw_box(self, screen: pygame.Surface, box_x: int, box_y: int, color: int,
                  pixel_x: Optional[int] = None, pixel_y: Optional[int] = None) -> None:
        if color == BLANK:
            return
        if pixel_x is None or pixel_y is None:
            pixel_x, pixel_y = self._pixel_coords(box_x, box_y)
        size = self.box_size
        pygame.draw.rect(screen, color_for_value(color), (pixel_x + 1, pixel_y + 1, size - 1, size - 1))
        pygame.draw.rect(screen, color_for_value(color, light=True), (pixel_x + 1, pixel_y + 1, size - 4, size - 4))

    def _draw_board(self, screen: pygame.Surface, board: np.ndarray) -> None:
        h, w = board.shape
        size = self.box_size
        pygame.draw.rect(
            screen,
            BORDER_COLOR,
            (self.x_margin - 3, self.top_margin - 7, w * size + 8, h * size + 8),
            5,
        )
        pygame.draw.rect(screen, BG_COLOR, (self.x_margin, self.top_margin, w * size, h * size))
        for y in range(h):
            for x in range(w):
                self._draw_box(screen, x, y, int(board[y, x]))

    def _draw_piece(self, screen: pygame.Surface, piece: Piece,
                    pixel_x: Optional[int] = None, pixel_y: Optional[int] = None) -> None:
        on_board = pixel_x is None or pixel_y is None
        if on_board:
            pixel_x, pixel_y = self._pixel_coords(piece.x, piece.y)
        for cx, cy in piece.occupied_cells():
            if on_board and piece.y + cy < 0:
                continue
            self._draw_box(screen, 0, 0, piece.color,
                           pixel_x + cx * self.box_size, pixel_y + cy * self.box_size)

    def _draw_status(self, screen: pygame.Surface, snapshot: Snapshot) -> None:
        score = self.basic_font.render(f"Score: {snapshot.score}", True, TEXT_COLOR)
        screen.blit(score, score.get_rect(topleft=(self.width - 150, 20)))
        level = self.basic_font.render(f"Level: {snapshot.level}", True, TEXT_COLOR)
        screen.blit(level, level.get_rect(topleft=(self.width - 150, 50)))

    def _draw_next_piece(self, screen: pygame.Surface, piece: Piece) -> None:
        label = self.basic_font.render("Next:", True, TEXT_COLOR)
        screen.blit(label, label.get_rect(topleft=(self.width - 120, 80)))
        self._draw_piece(screen, piece, pixel_x=self.width - 120, pixel_y=100)

    def _draw_text_screen(self, screen: pygame.Surface, title: str) -> None:
        center = (self.width // 2, self.height // 2)
        shadow = self.big_font.render(title, True, TEXT_SHADOW_COLOR)
        screen.blit(shadow, shadow.get_rect(center=center))
        text = self.big_font.render(title, True, TEXT_COLOR)
        screen.blit(text, text.get_rect(center=(center[0] - 3, center[1] - 3)))
        hint = self.basic_font.render("Press a key to play.", True, TEXT_COLOR)
        screen.blit(hint, hint.get_rect(center=(center[0], center[1] + 100)))

    def draw(self, screen: pygame.Surface, snapshot: Snapshot) -> None:
        screen.fill(BG_COLOR)
        title = _SCREEN_TITLES.get(snapshot.state)
        if snapshot.state in (GameState.TITLE_SCREEN, GameState.PAUSED):
            # Board stays hidden while paused.
            self._draw_text_screen(screen, title)
        else:
            self._draw_board(screen, snapshot.board)
            self._draw_status(screen, snapshot)
            self._draw_next_piece(screen, snapshot.next_piece)
            if snapshot.falling_piece is not None:
                self._draw_piece(screen, snapshot.falling_piece)
            if title is not None:
                self._draw_text_screen(screen, title)
        pygame.display.flip()
