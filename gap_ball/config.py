from __future__ import annotations

"""Game configuration constants for Gap Ball."""

from dataclasses import dataclass

from .utils import clamp

# Game configuration
PLAY_AREA_MIN_WIDTH = 350
PLAY_AREA_MAX_WIDTH = 500
PLAY_AREA_HEIGHT = 500
FPS = 60
CAPTION = "Gap Ball"

# Physics (fixed step, units are px per tick)
GRAVITY = 0.35
MAX_FALL_SPEED = 10.0
JUMP_VELOCITY = -7.0

# Player
PLAYER_X = 30
PLAYER_RADIUS = 15

# Obstacles
LANE_COUNT = 4
FIRST_LANE_X = 500
LANE_SPACING = 220
SCROLL_SPEED = -5.0
OBSTACLE_WIDTH = 60
OBSTACLE_HEIGHT_MARGIN = 80  # obstacle height = play area height - margin
OBSTACLE_RECYCLE_X = -40  # recycle once the right edge passes this
RELAUNCH_OFFSET = 280  # relaunch x = play area width + offset
TOP_Y_MIN = -340
TOP_Y_MAX = -140
BOTTOM_OFFSET = 60  # bottom.y = top.y + height + offset

# Scorers
SCORER_WIDTH = 10
SCORER_HEIGHT = 140
SCORER_X_OFFSET = 50  # from the top obstacle's left edge
SCORER_RECYCLE_X = -90

# Palette
BACKGROUND_COLOR = (255, 255, 255)
PLAYER_COLOR = (0, 0, 255)
OBSTACLE_COLOR = (0, 128, 0)
SCORER_COLOR = (0, 0, 0, 0)  # transparent
TEXT_COLOR = (0, 0, 0)

# Fonts (pixel sizes: 2rem and 1.2rem at a 16px root)
FONT_NAME = "arial"
FONT_LARGE = 32
FONT_SMALL = 19
SCORE_Y = 50
RESET_HINT_OFFSET = 50

# Environment overrides read by main()
ENV_LOG_LEVEL = "GAP_BALL_LOG_LEVEL"
ENV_OUTER_WIDTH = "GAP_BALL_OUTER_WIDTH"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class PlayArea:
    """Dimensions of the playing field in pixels."""

    width: int = PLAY_AREA_MAX_WIDTH
    height: int = PLAY_AREA_HEIGHT

    @classmethod
    def from_outer_width(cls, outer_width: int) -> "PlayArea":
        """Clamp the host window width into the supported range."""
        width = clamp(int(outer_width), PLAY_AREA_MIN_WIDTH, PLAY_AREA_MAX_WIDTH)
        return cls(width=width, height=PLAY_AREA_HEIGHT)

    @property
    def relaunch_x(self) -> int:
        return self.width + RELAUNCH_OFFSET

    @property
    def obstacle_height(self) -> int:
        return self.height - OBSTACLE_HEIGHT_MARGIN
