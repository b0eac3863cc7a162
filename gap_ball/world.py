"""World state: the player, the obstacle lanes, score and run state."""

from __future__ import annotations

import logging
import random
from typing import Iterator

from .config import (
    FIRST_LANE_X,
    LANE_COUNT,
    LANE_SPACING,
    RESET_HINT_OFFSET,
    SCORE_Y,
    PlayArea,
)
from .entities import Entity, Lane, Player
from .render import RenderSurface
from .utils import circle_rect_collision

logger = logging.getLogger(__name__)


class World:
    """Everything one game session simulates.

    A world is never revived: once ``running`` is False the session
    replaces it with a fresh one on reset.
    """

    def __init__(self, play_area: PlayArea, rng: random.Random | None = None) -> None:
        self.play_area = play_area
        self.rng = rng or random.Random()
        self.player = Player(play_area)
        self.lanes: list[Lane] = [
            Lane.build(i, FIRST_LANE_X + LANE_SPACING * i, play_area, self.rng)
            for i in range(LANE_COUNT)
        ]
        self.score = 0
        self.running = True

    def entities(self) -> Iterator[Entity]:
        """Entities in draw order: each lane's members, then the player."""
        for lane in self.lanes:
            yield from lane.members()
        yield self.player

    def update(self) -> None:
        # Player first so collision checks see its fresh position
        self.player.update()
        for lane in self.lanes:
            lane.top.update()
            lane.bottom.update()
        for lane in self.lanes:
            lane.scorer.update()
        if not self.player.alive:
            self.end("floor")

    def detect_collisions(self) -> None:
        center, radius = self.player.position, self.player.radius
        for lane in self.lanes:
            for obstacle in (lane.top, lane.bottom):
                if circle_rect_collision(center, radius, obstacle.position, obstacle.size):
                    self.end(f"lane {lane.index} {obstacle.role.value} obstacle")

            scorer = lane.scorer
            if scorer.armed and circle_rect_collision(center, radius, scorer.position, scorer.size):
                self.score += 1
                scorer.armed = False
                logger.debug("lane %d cleared, score=%d", lane.index, self.score)

    def end(self, cause: str) -> None:
        if self.running:
            logger.info("game over (%s), score=%d", cause, self.score)
        self.running = False

    def draw(self, surface: RenderSurface) -> None:
        width, height = self.play_area.width, self.play_area.height
        surface.clear(width, height)
        for entity in self.entities():
            entity.draw(surface)

        surface.stroke_text(f"Score: {self.score}", (width / 2, SCORE_Y))

        if not self.running:
            surface.draw_text("Game Over", (width / 2, height / 2))
            surface.draw_text('Press "R" to reset', (width / 2, height / 2 + RESET_HINT_OFFSET), surface.small_font)
