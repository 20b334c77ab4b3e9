"""Common GameState enum for all cabinet games.

    IDLE       constructed, never reset
    PLAYING    reset_game() ran; the engine drives the update callback
    GAME_OVER  terminal condition reached; reset_game() plays again
"""
from enum import Enum


class GameState(Enum):
    IDLE = "idle"
    PLAYING = "playing"
    GAME_OVER = "game_over"
