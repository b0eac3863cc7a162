"""Drawing primitives over a pygame surface."""

from __future__ import annotations

import logging
from typing import Sequence

import pygame

from .config import BACKGROUND_COLOR, FONT_LARGE, FONT_NAME, FONT_SMALL, TEXT_COLOR

logger = logging.getLogger(__name__)

Color = Sequence[int]

_STROKE_OFFSETS = ((-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0), (-1, 1), (0, 1), (1, 1))


class RenderSurfaceError(RuntimeError):
    """Raised when no display surface can be acquired."""


def open_display(width: int, height: int, caption: str) -> pygame.Surface:
    """Create the game window, or raise RenderSurfaceError."""
    try:
        screen = pygame.display.set_mode((width, height), pygame.DOUBLEBUF)
    except pygame.error as exc:
        raise RenderSurfaceError(f"could not open a {width}x{height} display: {exc}") from exc
    pygame.display.set_caption(caption)
    logger.debug("opened %dx%d display", width, height)
    return screen


class RenderSurface:
    """Canvas-style drawing calls on top of a ``pygame.Surface``.

    Text is anchored at ``position`` by its vertical centre and by the
    left edge, centre or right edge according to ``align``.
    """

    def __init__(
        self,
        surf: pygame.Surface,
        font: pygame.font.Font | None = None,
        small_font: pygame.font.Font | None = None,
    ) -> None:
        self.surf = surf
        self.font = font or pygame.font.SysFont(FONT_NAME, FONT_LARGE)
        self.small_font = small_font or pygame.font.SysFont(FONT_NAME, FONT_SMALL)

    @property
    def size(self) -> tuple[int, int]:
        return self.surf.get_size()

    def clear(self, width: int, height: int) -> None:
        self.surf.fill(BACKGROUND_COLOR, pygame.Rect(0, 0, width, height))

    def fill_circle(self, center: Sequence[float], radius: float, color: Color) -> None:
        if len(color) == 4 and color[3] == 0:
            return
        pygame.draw.circle(self.surf, color, (round(center[0]), round(center[1])), round(radius))

    def fill_rect(self, top_left: Sequence[float], size: Sequence[float], color: Color) -> None:
        # Fully transparent fills leave the surface untouched
        if len(color) == 4 and color[3] == 0:
            return
        rect = pygame.Rect(round(top_left[0]), round(top_left[1]), round(size[0]), round(size[1]))
        pygame.draw.rect(self.surf, color, rect)

    def draw_text(
        self,
        text: str,
        position: Sequence[float],
        font: pygame.font.Font | None = None,
        align: str = "center",
        color: Color = TEXT_COLOR,
    ) -> pygame.Rect:
        image = (font or self.font).render(text, True, color)
        return self.surf.blit(image, self._place(image, position, align))

    def stroke_text(
        self,
        text: str,
        position: Sequence[float],
        font: pygame.font.Font | None = None,
        align: str = "center",
    ) -> pygame.Rect:
        """Outline-only text: an 8-way offset pass, then the fill knocked out."""
        font = font or self.font
        outline = font.render(text, True, TEXT_COLOR)
        inner = font.render(text, True, BACKGROUND_COLOR)
        rect = self._place(outline, position, align)
        for ox, oy in _STROKE_OFFSETS:
            self.surf.blit(outline, rect.move(ox, oy))
        self.surf.blit(inner, rect)
        return rect.inflate(2, 2)

    @staticmethod
    def _place(image: pygame.Surface, position: Sequence[float], align: str) -> pygame.Rect:
        x, y = round(position[0]), round(position[1])
        if align == "left":
            return image.get_rect(midleft=(x, y))
        if align == "right":
            return image.get_rect(midright=(x, y))
        if align == "center":
            return image.get_rect(center=(x, y))
        raise ValueError(f"unknown text alignment: {align!r}")
