import os
import random

os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame
import pytest
from pygame.math import Vector2

from gap_ball.config import (
    MAX_FALL_SPEED,
    PLAY_AREA_HEIGHT,
    TOP_Y_MAX,
    TOP_Y_MIN,
    PlayArea,
)
from gap_ball.entities import Lane, Obstacle, Player, Role, Scorer, Size
from gap_ball.render import RenderSurface


def setup_module(module: object) -> None:
    pygame.init()


def teardown_module(module: object) -> None:
    pygame.quit()


AREA = PlayArea(500, 500)


def test_player_spawn() -> None:
    player = Player(AREA)
    assert player.position == Vector2(30, 235)
    assert player.velocity == Vector2(0, 0)
    assert player.radius == 15
    assert player.alive and not player.is_jumping


def test_player_first_tick_applies_gravity() -> None:
    player = Player(AREA)
    player.update()
    assert player.velocity.y == pytest.approx(0.35)
    # Gravity is applied after the move, so the first move is by zero
    player.update()
    assert player.position.y == pytest.approx(235.35)


def test_player_gravity_monotonic_and_capped() -> None:
    player = Player(PlayArea(500, 100000))
    previous = player.velocity.y
    for _ in range(200):
        player.update()
        assert player.velocity.y >= previous
        assert player.velocity.y < MAX_FALL_SPEED + 0.35
        previous = player.velocity.y
    assert player.velocity.y >= MAX_FALL_SPEED
    assert player.alive


def test_player_ceiling_clamp_keeps_velocity() -> None:
    player = Player(AREA)
    player.is_jumping = True
    for _ in range(100):
        player.update()
        assert player.position.y >= player.radius
    assert player.position.y == player.radius
    assert player.velocity.y == player.jump_velocity


def test_player_floor_contact_ends_life() -> None:
    player = Player(AREA)
    player.position.y = 486  # bottom edge at 501 after a zero move
    player.update()
    assert player.alive is False
    assert player.position.y == 485


def test_player_resting_on_floor_is_still_alive() -> None:
    player = Player(AREA)
    player.position.y = 485
    player.update()
    assert player.alive
    assert player.velocity.y == pytest.approx(0.35)


def test_jump_overrides_velocity_every_tick() -> None:
    player = Player(AREA)
    player.velocity.y = 8.0
    player.is_jumping = True
    player.update()
    assert player.velocity.y == -7
    player.update()
    assert player.velocity.y == -7
    player.is_jumping = False
    player.update()
    assert player.velocity.y == pytest.approx(-6.65)


def make_lane(x: float = 500, seed: int = 0, area: PlayArea = AREA) -> Lane:
    return Lane.build(0, x, area, random.Random(seed))


def test_lane_layout() -> None:
    lane = make_lane()
    assert TOP_Y_MIN <= lane.top.position.y <= TOP_Y_MAX
    assert lane.top.role is Role.TOP and lane.bottom.role is Role.BOTTOM
    assert lane.top.size == Size(60, PLAY_AREA_HEIGHT - 80)
    assert lane.bottom.position == Vector2(500, lane.top.position.y + 560)
    assert lane.scorer.position == Vector2(550, lane.bottom.position.y - 140)
    assert lane.scorer.size == Size(10, 140)
    for member in lane.members():
        assert member.lane is lane


def test_scorer_sits_inside_gap() -> None:
    for seed in range(20):
        lane = make_lane(seed=seed)
        gap_top = lane.top.position.y + lane.top.size.h
        gap_bottom = lane.bottom.position.y
        assert gap_top <= lane.scorer.position.y
        assert lane.scorer.position.y + lane.scorer.size.h <= gap_bottom
        assert lane.top.position.x <= lane.scorer.position.x <= lane.top.position.x + lane.top.size.w


def test_obstacle_scrolls() -> None:
    lane = make_lane()
    lane.top.update()
    assert lane.top.position.x == 495


def test_top_obstacle_recycles_with_new_height() -> None:
    lane = make_lane()
    lane.top.position.x = -101  # right edge -46 after the scroll
    lane.top.update()
    assert lane.top.position.x == 780
    assert TOP_Y_MIN <= lane.top.position.y <= TOP_Y_MAX


def test_obstacle_recycle_threshold() -> None:
    lane = make_lane()
    lane.top.position.x = -95  # right edge -40 after the scroll, not yet past
    lane.top.update()
    assert lane.top.position.x == -100
    lane.top.update()
    assert lane.top.position.x == 780


def test_relaunch_x_follows_width() -> None:
    lane = make_lane(area=PlayArea(350, 500))
    lane.top.position.x = -200
    lane.top.update()
    assert lane.top.position.x == 630


def test_bottom_obstacle_follows_top_on_recycle() -> None:
    lane = make_lane()
    lane.top.position.x = lane.bottom.position.x = -200
    lane.top.update()
    lane.bottom.update()
    assert lane.bottom.position.x == 780
    assert lane.bottom.position.y == lane.top.position.y + 560


def test_recycled_top_height_is_random() -> None:
    lane = make_lane(seed=3)
    heights = set()
    for _ in range(30):
        lane.top.position.x = -200
        lane.top.update()
        heights.add(lane.top.position.y)
    assert len(heights) > 1
    assert all(TOP_Y_MIN <= y <= TOP_Y_MAX for y in heights)


def test_scorer_recycles_and_rearms() -> None:
    lane = make_lane()
    lane.top.position.x = 735
    lane.scorer.armed = False
    lane.scorer.position.x = -96  # right edge -91 after the scroll
    lane.scorer.update()
    assert lane.scorer.position.x == 785
    assert lane.scorer.position.y == lane.bottom.position.y - 140
    assert lane.scorer.armed is True


def test_scorer_stays_disarmed_until_recycled() -> None:
    lane = make_lane()
    lane.scorer.armed = False
    lane.scorer.position.x = -90  # right edge -85 after the scroll
    lane.scorer.update()
    assert lane.scorer.armed is False
    assert lane.scorer.position.x == -95


def test_draw_entities() -> None:
    surf = pygame.Surface((500, 500))
    surface = RenderSurface(surf)
    surface.clear(500, 500)

    player = Player(AREA)
    player.draw(surface)
    assert surf.get_at((30, 235))[:3] == (0, 0, 255)

    obstacle = Obstacle(Vector2(100, 100), Role.TOP, AREA)
    obstacle.draw(surface)
    assert surf.get_at((130, 200))[:3] == (0, 128, 0)

    scorer = Scorer(Vector2(300, 100))
    scorer.draw(surface)
    assert surf.get_at((305, 150))[:3] == (255, 255, 255)


def test_unbound_lane_member_fails_clearly_on_recycle() -> None:
    obstacle = Obstacle(Vector2(-200, 100), Role.BOTTOM, AREA)
    with pytest.raises(RuntimeError, match="not bound to a lane"):
        obstacle.update()
    scorer = Scorer(Vector2(-200, 100))
    with pytest.raises(RuntimeError, match="not bound to a lane"):
        scorer.update()


def test_unbound_top_obstacle_scrolls_until_recycle() -> None:
    obstacle = Obstacle(Vector2(100, 100), Role.TOP, AREA)
    obstacle.update()
    assert obstacle.position.x == 95
