"""Game entities: the player-controlled ball, obstacles and scoring gates.

Every entity implements the :class:`Entity` interface so the world can
update and draw them uniformly. Obstacles and scorers belong to a
:class:`Lane`, through which they find their partners when recycling.
"""

from __future__ import annotations

import enum
import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import NamedTuple

from pygame.math import Vector2

from .config import (
    BOTTOM_OFFSET,
    GRAVITY,
    JUMP_VELOCITY,
    MAX_FALL_SPEED,
    OBSTACLE_COLOR,
    OBSTACLE_RECYCLE_X,
    OBSTACLE_WIDTH,
    PLAYER_COLOR,
    PLAYER_RADIUS,
    PLAYER_X,
    SCORER_COLOR,
    SCORER_HEIGHT,
    SCORER_RECYCLE_X,
    SCORER_WIDTH,
    SCORER_X_OFFSET,
    SCROLL_SPEED,
    TOP_Y_MAX,
    TOP_Y_MIN,
    PlayArea,
)
from .render import RenderSurface
from .utils import random_int

logger = logging.getLogger(__name__)


class Size(NamedTuple):
    w: float
    h: float


class Role(enum.Enum):
    TOP = "top"
    BOTTOM = "bottom"


class Entity(ABC):
    """Something the world advances once per tick and draws once per frame."""

    @abstractmethod
    def update(self) -> None:
        ...

    @abstractmethod
    def draw(self, surface: RenderSurface) -> None:
        ...


class Player(Entity):
    """The ball the player steers; falls under gravity and rises while jumping."""

    def __init__(self, play_area: PlayArea) -> None:
        self.play_area = play_area
        self.radius = PLAYER_RADIUS
        self.position = Vector2(PLAYER_X, play_area.height / 2 - self.radius)
        self.velocity = Vector2(0, 0)
        self.jump_velocity = JUMP_VELOCITY
        self.is_jumping = False
        self.alive = True

    def update(self) -> None:
        self.position += self.velocity

        # Soft ceiling: position is clamped, velocity is kept
        if self.position.y < self.radius:
            self.position.y = self.radius

        if self.position.y + self.radius <= self.play_area.height:
            if self.velocity.y < MAX_FALL_SPEED:
                self.velocity.y += GRAVITY
        else:
            self.position.y = self.play_area.height - self.radius
            self.alive = False

        # Holding jump re-applies the upward velocity every tick
        if self.is_jumping:
            self.velocity.y = self.jump_velocity

    def draw(self, surface: RenderSurface) -> None:
        surface.fill_circle(self.position, self.radius, PLAYER_COLOR)


class _Scroller(Entity):
    """Shared horizontal scrolling for lane members."""

    color: tuple[int, ...]

    def __init__(self, position: Vector2, size: Size) -> None:
        self.position = Vector2(position)
        self.size = size
        self.scroll_velocity = Vector2(SCROLL_SPEED, 0)
        self._lane: Lane | None = None

    @property
    def lane(self) -> Lane:
        """The lane this entity belongs to; bound by :class:`Lane`."""
        if self._lane is None:
            raise RuntimeError(f"{type(self).__name__} is not bound to a lane")
        return self._lane

    @lane.setter
    def lane(self, lane: Lane) -> None:
        self._lane = lane

    @property
    def right(self) -> float:
        """x of the right edge."""
        return self.position.x + self.size.w

    def scroll(self) -> None:
        """Advance one tick along the scroll velocity."""
        self.position.x += self.scroll_velocity.x

    def draw(self, surface: RenderSurface) -> None:
        surface.fill_rect(self.position, self.size, self.color)


class Obstacle(_Scroller):
    """One half of a lane's obstacle pair; relaunched to the right once off screen."""

    color = OBSTACLE_COLOR

    def __init__(
        self,
        position: Vector2,
        role: Role,
        play_area: PlayArea,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(position, Size(OBSTACLE_WIDTH, play_area.obstacle_height))
        self.role = role
        self.play_area = play_area
        self.rng = rng or random.Random()

    def update(self) -> None:
        self.scroll()
        if self.right < OBSTACLE_RECYCLE_X:
            self.recycle()

    def recycle(self) -> None:
        self.position.x = self.play_area.relaunch_x
        if self.role is Role.TOP:
            self.position.y = random_int(TOP_Y_MIN, TOP_Y_MAX, self.rng)
        else:
            self.position.y = self.lane.top.position.y + self.play_area.height + BOTTOM_OFFSET
        logger.debug("lane %d %s obstacle relaunched at y=%.0f", self.lane.index, self.role.value, self.position.y)


class Scorer(_Scroller):
    """Invisible gate inside a lane's gap; awards a point while armed."""

    color = SCORER_COLOR

    def __init__(self, position: Vector2) -> None:
        super().__init__(position, Size(SCORER_WIDTH, SCORER_HEIGHT))
        self.armed = True

    def update(self) -> None:
        self.scroll()
        if self.right < SCORER_RECYCLE_X:
            self.recycle()

    def recycle(self) -> None:
        self.position.x = self.lane.top.position.x + SCORER_X_OFFSET
        self.position.y = self.lane.bottom.position.y - SCORER_HEIGHT
        self.armed = True
        logger.debug("lane %d scorer re-armed", self.lane.index)


@dataclass
class Lane:
    """One obstacle pair and its scoring gate, addressed by a stable index."""

    index: int
    top: Obstacle
    bottom: Obstacle
    scorer: Scorer

    def __post_init__(self) -> None:
        for member in self.members():
            member.lane = self

    @classmethod
    def build(cls, index: int, x: float, play_area: PlayArea, rng: random.Random) -> "Lane":
        top_y = random_int(TOP_Y_MIN, TOP_Y_MAX, rng)
        top = Obstacle(Vector2(x, top_y), Role.TOP, play_area, rng)
        bottom = Obstacle(Vector2(x, top_y + play_area.height + BOTTOM_OFFSET), Role.BOTTOM, play_area, rng)
        scorer = Scorer(Vector2(x + SCORER_X_OFFSET, bottom.position.y - SCORER_HEIGHT))
        return cls(index, top, bottom, scorer)

    def members(self) -> tuple[Obstacle, Obstacle, Scorer]:
        return self.top, self.bottom, self.scorer
