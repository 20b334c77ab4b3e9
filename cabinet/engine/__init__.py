"""
Arcade engine: entities, the tick loop and key dispatch.
"""

from cabinet.engine.engine import ArcadeEngine, DEFAULT_TICK_INTERVAL
from cabinet.engine.entity import GameObject, Position
from cabinet.engine.keys import Key
from cabinet.engine.state import EngineState

__all__ = [
    'ArcadeEngine',
    'DEFAULT_TICK_INTERVAL',
    'GameObject',
    'Position',
    'Key',
    'EngineState',
]
