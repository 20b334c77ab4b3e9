"""
GameObject - a positioned simulation object backed by one host panel.

The panel is the only visual an entity has. Position changes stay in the
simulation until ``update()`` writes them to the panel, which the engine
does for every live entity at the end of each tick.

Per-game attributes (facing, velocity, dimensions, ...) live in ``data``,
a dataclass defined by the owning game.
"""

import math
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, TYPE_CHECKING

if TYPE_CHECKING:
    from cabinet.engine.engine import ArcadeEngine
    from cabinet.host.panel import Panel

T = TypeVar('T')


@dataclass
class Position:
    """Mutable 2D simulation position in canvas pixels."""
    x: float = 0.0
    y: float = 0.0

    def copy(self) -> 'Position':
        return Position(self.x, self.y)


def round_pixel(value: float) -> int:
    """Round to the nearest pixel, halves towards +infinity."""
    return math.floor(value + 0.5)


class GameObject(Generic[T]):
    """A simulated object with a position and an owned panel.

    Create through ``ArcadeEngine.create_game_object`` so the engine's
    registry stays consistent; never instantiate directly from a game.
    """

    def __init__(
        self,
        engine: 'ArcadeEngine',
        object_id: int,
        name: str,
        panel: 'Panel',
        data: Optional[T] = None,
    ):
        self._engine = engine
        self.id = object_id
        self.name = name
        self.panel: Optional['Panel'] = panel
        self.position = Position()
        self.data: Optional[T] = data

    def move(self, dx: float, dy: float) -> None:
        """Add a delta to the position. Bounds are the owning game's concern."""
        self.position.x += dx
        self.position.y += dy

    def place(self, x: float, y: float) -> None:
        self.position.x = x
        self.position.y = y

    def update(self) -> None:
        """Write the rounded position to the panel."""
        if self.panel is None:
            return
        x = round_pixel(self.position.x)
        y = round_pixel(self.position.y)
        self.panel.set_style('position', f"{x}.0px {y}.0px 0.0px")

    def destroy(self) -> None:
        """Remove from the engine and release the panel. Safe to repeat."""
        self._engine.destroy_object(self)

    @property
    def alive(self) -> bool:
        return self.panel is not None

    def __str__(self) -> str:
        return f"GameObject {self.id} - {self.name}"

    def __repr__(self) -> str:
        return (f"GameObject(id={self.id}, name={self.name!r}, "
                f"x={self.position.x:.2f}, y={self.position.y:.2f})")
