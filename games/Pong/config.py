"""Configuration for Pong.

Speeds are in pixels per nominal tick (16 ms); the game scales them by
``dt / NOMINAL_TICK`` so movement does not depend on the frame rate.
The dead-zone, speed increment and win condition are difficulty tuning.

Layout limits (paddle and ball start, wall and goal lines) are derived
from the field size, so overriding ``field_width``/``field_height``
resizes the whole court.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Field
FIELD_WIDTH: int = 640
FIELD_HEIGHT: int = 376

# Paddles
PADDLE_WIDTH: int = 24
PADDLE_HEIGHT: int = 80
PLAYER_PADDLE_X: float = 60.0
AI_PADDLE_MARGIN: float = 52.0  # right field edge to the AI paddle's right side
PADDLE_FLOOR_GAP: float = 4.0
PADDLE_SPEED: float = 4.0

# AI
AI_DEAD_ZONE: float = 12.0

# Ball
BALL_SIZE: int = 8
BALL_FLOOR_GAP: float = 10.0  # ball top never goes below field_height - this
BALL_SPEED: float = 4.0
BALL_SPEED_INCREMENT: float = 0.1
LAUNCH_CONE_DEGREES: float = 90.0
MAX_BOUNCE_DEGREES: float = 60.0

# Match
WIN_SCORE: int = 7
WIN_MARGIN: int = 2

NOMINAL_TICK: float = 0.016

PADDLE_COLOR: str = "#FFFFFF"
BALL_COLOR: str = "#FFFFFF"


class PongConfig(BaseModel):
    """Pong tuning (defaults are the module constants)."""
    field_width: int = Field(default=FIELD_WIDTH, gt=0)
    field_height: int = Field(default=FIELD_HEIGHT, gt=0)
    paddle_width: int = Field(default=PADDLE_WIDTH, gt=0)
    paddle_height: int = Field(default=PADDLE_HEIGHT, gt=0)
    player_paddle_x: float = Field(default=PLAYER_PADDLE_X, ge=0)
    ai_paddle_margin: float = Field(default=AI_PADDLE_MARGIN, ge=0)
    paddle_floor_gap: float = Field(default=PADDLE_FLOOR_GAP, ge=0)
    paddle_speed: float = Field(default=PADDLE_SPEED, ge=0)
    ai_dead_zone: float = Field(default=AI_DEAD_ZONE, ge=0)
    ball_size: int = Field(default=BALL_SIZE, gt=0)
    ball_floor_gap: float = Field(default=BALL_FLOOR_GAP, ge=0)
    ball_speed: float = Field(default=BALL_SPEED, gt=0)
    ball_speed_increment: float = Field(default=BALL_SPEED_INCREMENT, ge=0)
    launch_cone_degrees: float = Field(default=LAUNCH_CONE_DEGREES, gt=0, lt=180)
    max_bounce_degrees: float = Field(default=MAX_BOUNCE_DEGREES, gt=0, lt=90)
    win_score: int = Field(default=WIN_SCORE, gt=0)
    win_margin: int = Field(default=WIN_MARGIN, ge=0)
    nominal_tick: float = Field(default=NOMINAL_TICK, gt=0)
    paddle_color: str = PADDLE_COLOR
    ball_color: str = BALL_COLOR

    model_config = ConfigDict(frozen=True, extra='forbid')

    @model_validator(mode='after')
    def court_fits_paddles(self) -> 'PongConfig':
        if self.paddle_max_y <= 0:
            raise ValueError("field_height too small for paddle_height and paddle_floor_gap")
        if self.ball_max_y <= 0:
            raise ValueError("field_height too small for ball_floor_gap")
        if self.ai_paddle_x <= self.player_paddle_x + self.paddle_width:
            raise ValueError("field_width too small to separate the paddles")
        return self

    @property
    def ai_paddle_x(self) -> float:
        return self.field_width - self.ai_paddle_margin - self.paddle_width

    @property
    def paddle_start_y(self) -> float:
        return (self.field_height - self.paddle_height) / 2

    @property
    def paddle_max_y(self) -> float:
        return self.field_height - self.paddle_height - self.paddle_floor_gap

    @property
    def ball_start_x(self) -> float:
        return self.field_width / 2

    @property
    def ball_start_y(self) -> float:
        return (self.field_height - self.ball_size) / 2

    @property
    def ball_max_y(self) -> float:
        return self.field_height - self.ball_floor_gap

    @property
    def ball_out_left(self) -> float:
        return -self.ball_size

    @property
    def ball_out_right(self) -> float:
        return self.field_width
