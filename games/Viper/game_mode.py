"""Viper - grid snake for the cabinet.

The head moves one cell per move-timer expiry in its facing direction and
the body follows. Eating a pickup grows the snake by one segment. Running
into the body or off the field ends the round.

Turning straight back is allowed and collides on the next move.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from cabinet.engine import GameObject, Key, Position
from cabinet.games import BaseGame

from .config import ViperConfig


class Direction(Enum):
    """Facing directions as unit grid steps (screen y grows downward)."""
    N = (0, -1)
    E = (1, 0)
    S = (0, 1)
    W = (-1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


KEY_DIRECTIONS = {
    Key.W: Direction.N,
    Key.A: Direction.W,
    Key.S: Direction.S,
    Key.D: Direction.E,
}


@dataclass
class SegmentData:
    """Per-segment attributes. Only the head has a facing."""
    facing: Optional[Direction] = None


class ViperMode(BaseGame):
    """Snake game mode.

    Segments are ordered head to tail; ``segments[0]`` is the head.
    """

    NAME = "Viper"
    DESCRIPTION = "Grid snake: eat pickups, grow, avoid yourself and the walls."
    VERSION = "1.0.0"
    CONTROLS = ["W/A/S/D: turn"]
    CONFIG_MODEL = ViperConfig
    LOGGER_NAME = 'viper'

    def __init__(self, engine, rng=None, config=None, **overrides):
        super().__init__(engine, rng=rng, config=config, **overrides)
        self.config: ViperConfig
        self._snake: List[GameObject[SegmentData]] = []
        self._pickup: Optional[GameObject] = None
        self._score = 0
        self._time_since_last_move = self.config.move_interval
        self._moves = 0

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def head(self) -> Optional[GameObject[SegmentData]]:
        return self._snake[0] if self._snake else None

    @property
    def segments(self) -> Tuple[GameObject[SegmentData], ...]:
        return tuple(self._snake)

    @property
    def pickup(self) -> Optional[GameObject]:
        return self._pickup

    @property
    def facing(self) -> Optional[Direction]:
        head = self.head
        return head.data.facing if head is not None else None

    @property
    def moves(self) -> int:
        """Grid moves made this round."""
        return self._moves

    def get_score(self) -> int:
        return self._score

    # =========================================================================
    # Round setup
    # =========================================================================

    def _segment_style(self, color: str) -> dict:
        size = f"{self.config.segment_size}px"
        return {
            "width": size,
            "height": size,
            "margin": f"{self.config.segment_margin}px",
            "backgroundColor": color,
        }

    def _reset(self) -> None:
        for segment in self._snake:
            segment.destroy()

        head = self._engine.create_game_object(
            "Player", self._segment_style(self.config.snake_color), SegmentData(Direction.E)
        )
        head.place(0, 0)
        self._snake = [head]
        self._score = 0
        self._moves = 0
        self._time_since_last_move = self.config.move_interval

        self._engine.play()

        self.spawn_pickup()

        self._engine.on_update(self._update)
        for key, direction in KEY_DIRECTIONS.items():
            self._engine.on_key_press(key, self._make_turn(direction))

    def _make_turn(self, direction: Direction):
        def turn(key: Key) -> None:
            head = self.head
            if head is None:
                return
            head.data.facing = direction
        return turn

    # =========================================================================
    # Per-tick logic
    # =========================================================================

    def _update(self, dt: float) -> None:
        if self._skip_tick(dt):
            return
        self._time_since_last_move -= dt
        if self._time_since_last_move <= 0:
            self._time_since_last_move = self.config.move_interval
            self.step()

    def step(self) -> None:
        """One grid move followed by the collision checks."""
        if not self.is_playing or not self._snake:
            return
        former_tail = self._snake[-1].position.copy()
        self._move_snake()
        self._moves += 1

        if self._hit_self() or self._out_of_bounds():
            self.game_over()
            return

        if self._on_pickup():
            self._score += 1
            self._grow(former_tail)
            self.spawn_pickup()

    def _move_snake(self) -> None:
        # Tail first so no position is overwritten before it is read
        for i in range(len(self._snake) - 1, 0, -1):
            leader = self._snake[i - 1].position
            self._snake[i].place(leader.x, leader.y)

        head = self._snake[0]
        facing = head.data.facing or Direction.E
        cell = self.config.cell_size
        head.move(facing.dx * cell, facing.dy * cell)

        for segment in self._snake:
            segment.update()

    def _hit_self(self) -> bool:
        head = self._snake[0]
        for segment in self._snake:
            if segment.id == head.id:
                continue
            if segment.position == head.position:
                self.log.info("%s vs %s", head, segment)
                return True
        return False

    def _out_of_bounds(self) -> bool:
        pos = self._snake[0].position
        return (
            pos.x >= self.config.field_width
            or pos.x < 0
            or pos.y >= self.config.field_height
            or pos.y < 0
        )

    def _on_pickup(self) -> bool:
        return self._pickup is not None and self._pickup.position == self._snake[0].position

    def _grow(self, at: Position) -> None:
        segment = self._engine.create_game_object(
            "SnakeSegment", self._segment_style(self.config.snake_color), SegmentData()
        )
        segment.place(at.x, at.y)
        segment.update()
        self._snake.append(segment)

    # =========================================================================
    # Pickup
    # =========================================================================

    def _cell_position(self, column: int, row: int) -> Position:
        cell = self.config.cell_size
        return Position(float(column * cell), float(row * cell))

    def spawn_pickup(self) -> GameObject:
        """Replace the pickup with one on a random free grid cell.

        Prefers cells the snake does not cover and never reuses the
        previous pickup cell while any other cell exists.
        """
        previous = self._pickup.position.copy() if self._pickup is not None else None
        occupied = [segment.position for segment in self._snake]

        cells = [
            self._cell_position(column, row)
            for row in range(self.config.grid_rows)
            for column in range(self.config.grid_columns)
        ]
        fresh = [cell for cell in cells if cell != previous]
        free = [cell for cell in fresh if cell not in occupied]
        target = self._rng.choice(free or fresh or cells)

        if self._pickup is not None:
            self._pickup.destroy()

        self._pickup = self._engine.create_game_object(
            "Apple", self._segment_style(self.config.pickup_color)
        )
        self._pickup.place(target.x, target.y)
        self._pickup.update()
        return self._pickup

    def status_line(self) -> str:
        return f"{self.NAME}  score {self._score}  length {len(self._snake)}  [{self._state.value}]"
