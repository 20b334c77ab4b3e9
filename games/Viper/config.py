"""Configuration for Viper.

Grid geometry, pacing and colours. The play field is slightly larger than
the pickup grid: the head may travel one column past the last pickup
column before the boundary check ends the game.
"""

from pydantic import BaseModel, ConfigDict, Field

# Grid
CELL_SIZE: int = 16
GRID_COLUMNS: int = 40
GRID_ROWS: int = 20

# Play field boundary (head must stay within [0, width) x [0, height))
FIELD_WIDTH: int = 648
FIELD_HEIGHT: int = 360

# Pacing
MOVE_RATE: float = 8.0  # grid moves per second

# Visual
SEGMENT_SIZE: int = 12
SEGMENT_MARGIN: int = 4
SNAKE_COLOR: str = "#39FF14"
PICKUP_COLOR: str = "#FF4136"


class ViperConfig(BaseModel):
    """Viper tuning (defaults are the module constants)."""
    cell_size: int = Field(default=CELL_SIZE, gt=0)
    grid_columns: int = Field(default=GRID_COLUMNS, gt=0)
    grid_rows: int = Field(default=GRID_ROWS, gt=0)
    field_width: int = Field(default=FIELD_WIDTH, gt=0)
    field_height: int = Field(default=FIELD_HEIGHT, gt=0)
    move_rate: float = Field(default=MOVE_RATE, gt=0)
    segment_size: int = Field(default=SEGMENT_SIZE, gt=0)
    segment_margin: int = Field(default=SEGMENT_MARGIN, ge=0)
    snake_color: str = SNAKE_COLOR
    pickup_color: str = PICKUP_COLOR

    model_config = ConfigDict(frozen=True, extra='forbid')

    @property
    def move_interval(self) -> float:
        """Seconds between grid moves."""
        return 1.0 / self.move_rate
