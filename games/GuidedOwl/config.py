"""Configuration for Guided Owl.

Distances are pixels, velocities pixels/second, accelerations
pixels/second squared.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Field
FIELD_WIDTH: int = 640
FIELD_HEIGHT: int = 376

# Glider
GLIDER_WIDTH: int = 48
GLIDER_HEIGHT: int = 32
GLIDER_X: float = 64.0
GRAVITY: float = 256.0
FLAP_IMPULSE: float = 128.0

# Columns
COLUMN_WIDTH: int = 48
COLUMN_SPEED: float = 128.0
SPAWN_INTERVAL: float = 2.0
GAP_MIN: int = 80
GAP_RANGE: int = 40
BOTTOM_RESERVE: int = 32  # keeps the bottom column at least this tall

GLIDER_COLOR: str = "#55FF66"
COLUMN_COLOR: str = "#D2B48C"


class GuidedOwlConfig(BaseModel):
    """Guided Owl tuning (defaults are the module constants)."""
    field_width: int = Field(default=FIELD_WIDTH, gt=0)
    field_height: int = Field(default=FIELD_HEIGHT, gt=0)
    glider_width: int = Field(default=GLIDER_WIDTH, gt=0)
    glider_height: int = Field(default=GLIDER_HEIGHT, gt=0)
    glider_x: float = GLIDER_X
    gravity: float = Field(default=GRAVITY, ge=0)
    flap_impulse: float = Field(default=FLAP_IMPULSE, gt=0)
    column_width: int = Field(default=COLUMN_WIDTH, gt=0)
    column_speed: float = Field(default=COLUMN_SPEED, gt=0)
    spawn_interval: float = Field(default=SPAWN_INTERVAL, gt=0)
    gap_min: int = Field(default=GAP_MIN, gt=0)
    gap_range: int = Field(default=GAP_RANGE, ge=0)
    bottom_reserve: int = Field(default=BOTTOM_RESERVE, ge=0)
    glider_color: str = GLIDER_COLOR
    column_color: str = COLUMN_COLOR

    model_config = ConfigDict(frozen=True, extra='forbid')

    @model_validator(mode='after')
    def gap_fits_glider(self) -> 'GuidedOwlConfig':
        if self.gap_min <= self.glider_height:
            raise ValueError("gap_min must exceed glider_height or no gap is traversable")
        return self

    @property
    def glider_start_y(self) -> float:
        return (self.field_height - self.glider_height) / 2
