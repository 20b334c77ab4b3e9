"""Guided Owl - keep the glider airborne between scrolling columns.

Gravity pulls the glider down; Space flaps it up (harder when it is
already rising). Column pairs with a random gap enter from the right on
a fixed timer. Passing a pair scores a point; touching a column, the
floor or the ceiling ends the round.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from cabinet.engine import GameObject, Key
from cabinet.games import BaseGame

from .config import GuidedOwlConfig


@dataclass
class GliderData:
    velocity: float = 0.0  # vertical, pixels/second (positive = down)


@dataclass
class ColumnData:
    width: float
    height: float


ColumnPair = Tuple[GameObject[ColumnData], GameObject[ColumnData]]


class GuidedOwlMode(BaseGame):
    """Flappy-style game mode."""

    NAME = "Guided Owl"
    DESCRIPTION = "Flap through the gaps between scrolling columns."
    VERSION = "1.0.0"
    CONTROLS = ["Space: flap", "Escape: give up"]
    CONFIG_MODEL = GuidedOwlConfig
    LOGGER_NAME = 'guided_owl'

    def __init__(self, engine, rng=None, config=None, **overrides):
        super().__init__(engine, rng=rng, config=config, **overrides)
        self.config: GuidedOwlConfig
        self.player: Optional[GameObject[GliderData]] = None
        self.columns: List[ColumnPair] = []
        self._score = 0
        self._time_since_last_spawn = self.config.spawn_interval

    def get_score(self) -> int:
        return self._score

    # =========================================================================
    # Round setup
    # =========================================================================

    def _reset(self) -> None:
        cfg = self.config
        self._engine.destroy_object(self.player)
        for top, bottom in self.columns:
            top.destroy()
            bottom.destroy()

        self.player = self._engine.create_game_object("GuidedOwl", {
            "width": f"{cfg.glider_width}px",
            "height": f"{cfg.glider_height}px",
            "backgroundColor": cfg.glider_color,
        }, GliderData())
        self.player.place(cfg.glider_x, cfg.glider_start_y)

        self.columns = []
        self._score = 0

        self._engine.on_key_press(Key.SPACE, self._flap)
        self._engine.on_key_press(Key.ESCAPE, lambda key: self.game_over())

        self._engine.play()

        self._time_since_last_spawn = cfg.spawn_interval
        self._engine.on_update(self._update)

    def _flap(self, key: Key) -> None:
        if self.player is None:
            return
        glider = self.player.data
        if glider.velocity > 0:
            glider.velocity = -self.config.flap_impulse
        else:
            # Flapping while rising stacks
            glider.velocity -= self.config.flap_impulse

    # =========================================================================
    # Per-tick logic
    # =========================================================================

    def _update(self, dt: float) -> None:
        if self._skip_tick(dt):
            return
        self.step(dt)

    def step(self, dt: float) -> None:
        """Advance the simulation by ``dt`` seconds."""
        if not self.is_playing or self.player is None:
            return
        cfg = self.config

        self._time_since_last_spawn -= dt
        if self._time_since_last_spawn <= 0:
            self.spawn_columns()
            self._time_since_last_spawn = cfg.spawn_interval

        glider = self.player
        glider.data.velocity += cfg.gravity * dt
        glider.move(0, glider.data.velocity * dt)

        if glider.position.y >= cfg.field_height - cfg.glider_height or glider.position.y <= 0:
            self.game_over()
            return

        for i in range(len(self.columns) - 1, -1, -1):
            top, bottom = self.columns[i]
            top.move(-cfg.column_speed * dt, 0)
            bottom.move(-cfg.column_speed * dt, 0)

            if self._collides(top) or self._collides(bottom):
                self.game_over()
                return

            if top.position.x + top.data.width <= 0:
                top.destroy()
                bottom.destroy()
                del self.columns[i]
                self._score += 1

    def _collides(self, column: GameObject[ColumnData]) -> bool:
        """Inclusive box overlap between the glider and a column."""
        cfg = self.config
        p = self.player.position
        c = column.position
        return not (
            p.x + cfg.glider_width < c.x
            or p.x > c.x + column.data.width
            or p.y + cfg.glider_height < c.y
            or p.y > c.y + column.data.height
        )

    # =========================================================================
    # Spawning
    # =========================================================================

    def spawn_columns(self) -> Optional[ColumnPair]:
        """Spawn a column pair at the right edge with a random gap.

        Gap size is drawn from [gap_min, gap_min + gap_range) and the top
        column height from [0, max_top), where max_top leaves room for the
        gap plus the bottom reserve. Heights always add up to the field:
        ``top + gap == bottom_y`` and ``bottom_y + bottom == field_height``.

        Returns:
            The (top, bottom) pair, or None if the gap cannot fit
        """
        cfg = self.config
        gap = math.floor(cfg.gap_min + self._rng.random() * cfg.gap_range)
        max_top = cfg.field_height - gap - cfg.bottom_reserve

        if max_top < 0:
            self.log.warning("Invalid gap size or top height range. max_top: %s", max_top)
            return None

        top_height = math.floor(self._rng.random() * max_top)
        bottom_y = top_height + gap
        bottom_height = cfg.field_height - bottom_y

        top = self._make_column("TopColumn", top_height)
        top.place(cfg.field_width, 0)

        bottom = self._make_column("BottomColumn", bottom_height)
        bottom.place(cfg.field_width, bottom_y)

        pair = (top, bottom)
        self.columns.append(pair)
        self.log.debug("Columns spawned: gap=%d top=%d bottom_y=%d", gap, top_height, bottom_y)
        return pair

    def _make_column(self, name: str, height: float) -> GameObject[ColumnData]:
        cfg = self.config
        return self._engine.create_game_object(name, {
            "width": f"{cfg.column_width}.0px",
            "height": f"{height}.0px",
            "backgroundColor": cfg.column_color,
        }, ColumnData(width=cfg.column_width, height=height))
