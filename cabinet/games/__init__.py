"""
Cabinet game framework.

Provides:
- base_game: BaseGame class that all games inherit from
- game_state: Standard GameState enum
"""

from cabinet.games.game_state import GameState
from cabinet.games.base_game import BaseGame, MAX_TICK_SECONDS

__all__ = [
    'GameState',
    'BaseGame',
    'MAX_TICK_SECONDS',
]
