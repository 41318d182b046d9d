#!/usr/bin/env python3
"""
Pygame drawing helpers for the viewport.

PygameSurface is the draw target handed to SceneCoordinator.render(): it turns
the scene's (x1, y1, x2, y2) tuples into line strokes on a pygame Surface.
"""
from typing import Optional, Sequence, Tuple

import pygame

from .constants import SAFE_COORD_LIMIT, STICK_COLOR, STICK_WIDTH
from .data_models import LineTuple


def _safe_point(pt) -> Optional[Tuple[int, int]]:
    x, y = int(pt[0]), int(pt[1])
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


class PygameSurface:
    """Line-drawing adapter over a pygame Surface."""

    def __init__(self, surface: pygame.Surface, color=STICK_COLOR, width: int = STICK_WIDTH):
        self.surface = surface
        self.color = color
        self.width = width

    def draw_lines(self, lines: Sequence[LineTuple]) -> int:
        """Stroke every line; returns how many were drawn."""
        drawn = 0
        for x1, y1, x2, y2 in lines:
            start = _safe_point((x1, y1))
            end = _safe_point((x2, y2))
            if start is None or end is None:
                continue
            pygame.draw.line(self.surface, self.color, start, end, self.width)
            drawn += 1
        return drawn


_cached_font = None


def draw_text(surface, text, x, y, color):
    global _cached_font
    if not pygame.font.get_init():
        pygame.font.init()
    if _cached_font is None:
        _cached_font = pygame.font.SysFont("consolas", 16)
    img = _cached_font.render(text, True, color)
    surface.blit(img, (x, y))
