"""Game loop, frame scheduling and input handling for Gap Ball."""

from __future__ import annotations

import logging
import os
import random
import sys
from typing import Callable

import pygame

from .config import (
    CAPTION,
    DEFAULT_LOG_LEVEL,
    ENV_LOG_LEVEL,
    ENV_OUTER_WIDTH,
    FONT_LARGE,
    FONT_NAME,
    FONT_SMALL,
    FPS,
    PlayArea,
)
from .render import RenderSurface, RenderSurfaceError, open_display
from .world import World

logger = logging.getLogger(__name__)

JUMP_KEYS = (pygame.K_w, pygame.K_UP, pygame.K_SPACE)


class FrameScheduler:
    """Runs at most one callback per frame, on request.

    The host loop calls :meth:`run_pending` once per frame. A callback that
    wants to run again must request another frame itself.
    """

    def __init__(self) -> None:
        self._next_handle = 1
        self._pending: tuple[int, Callable[[], None]] | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def request_frame(self, callback: Callable[[], None]) -> int:
        if self._pending is not None:
            raise RuntimeError("a frame callback is already pending")
        handle = self._next_handle
        self._next_handle += 1
        self._pending = (handle, callback)
        return handle

    def cancel_frame(self, handle: int | None) -> None:
        if self._pending is not None and self._pending[0] == handle:
            self._pending = None

    def run_pending(self) -> bool:
        if self._pending is None:
            return False
        _, callback = self._pending
        self._pending = None
        callback()
        return True


class GameSession:
    """Owns the display, the frame scheduler and the current world."""

    def __init__(
        self,
        play_area: PlayArea | None = None,
        rng: random.Random | None = None,
    ) -> None:
        pygame.init()
        self.play_area = play_area or PlayArea()
        self.rng = rng or random.Random()
        self.screen = open_display(self.play_area.width, self.play_area.height, CAPTION)
        self.clock = pygame.time.Clock()
        self.font_big = pygame.font.SysFont(FONT_NAME, FONT_LARGE)
        self.font_small = pygame.font.SysFont(FONT_NAME, FONT_SMALL)
        self.surface = RenderSurface(self.screen, self.font_big, self.font_small)
        self.scheduler = FrameScheduler()
        self.world = World(self.play_area, self.rng)
        self.active = False
        self._frame: int | None = None

    def start(self) -> None:
        if self.active:
            return
        self.active = True
        logger.info("session started on a %dx%d play area", self.play_area.width, self.play_area.height)
        self._frame = self.scheduler.request_frame(self.tick)

    def stop(self) -> None:
        self.active = False
        self.scheduler.cancel_frame(self._frame)
        self._frame = None

    def reset(self) -> None:
        """Throw the world away and start over with a fresh one."""
        self.scheduler.cancel_frame(self._frame)
        self._frame = None
        self.world = World(self.play_area, self.rng)
        logger.info("game reset")
        if self.active:
            self._frame = self.scheduler.request_frame(self.tick)

    def tick(self) -> None:
        if self.world.running:
            self.world.update()
            self.world.detect_collisions()
        self.render()
        if self.active:
            self._frame = self.scheduler.request_frame(self.tick)

    def render(self) -> None:
        self.world.draw(self.surface)
        pygame.display.flip()

    def handle_input(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN:
            if event.key in JUMP_KEYS:
                self.world.player.is_jumping = True
            elif event.key == pygame.K_r:
                if not self.world.running:
                    self.reset()
            elif event.key == pygame.K_ESCAPE:
                self.stop()
        elif event.type == pygame.KEYUP:
            if event.key in JUMP_KEYS:
                self.world.player.is_jumping = False
        elif event.type == pygame.MOUSEBUTTONDOWN:
            if event.button == 1:
                self.world.player.is_jumping = True
        elif event.type == pygame.MOUSEBUTTONUP:
            if event.button == 1:
                self.world.player.is_jumping = False

    def run(self) -> None:
        self.start()
        while self.active:
            self.clock.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.stop()
                    break
                self.handle_input(event)
            if self.active:
                self.scheduler.run_pending()
        pygame.quit()


def outer_width() -> int:
    """Host window width: the override variable, else the desktop width."""
    override = os.environ.get(ENV_OUTER_WIDTH)
    if override:
        try:
            return int(override)
        except ValueError:
            logger.warning("ignoring %s=%r: not an integer", ENV_OUTER_WIDTH, override)
    return pygame.display.Info().current_w


def log_level() -> str:
    """Level name from the environment, or the default if it is not one."""
    level = os.environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(level), int):
        return DEFAULT_LOG_LEVEL
    return level


def main() -> None:
    level = log_level()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    requested = os.environ.get(ENV_LOG_LEVEL)
    if requested and requested.upper() != level:
        logger.warning("ignoring %s=%r: unknown log level", ENV_LOG_LEVEL, requested)
    pygame.init()
    play_area = PlayArea.from_outer_width(outer_width())
    try:
        session = GameSession(play_area)
    except RenderSurfaceError as exc:
        logger.error("%s", exc)
        pygame.quit()
        sys.exit(1)
    session.run()
