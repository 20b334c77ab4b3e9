"""Base class for all cabinet games.

A game is a state machine layered on a shared ArcadeEngine. It owns its
entities, score and termination condition, and while active it has
exactly one update callback and its key bindings registered with the
engine. ``reset_game()`` registers them; the engine's ``clear()`` removes
them again.

Game metadata (NAME, DESCRIPTION, etc.) and tuning (CONFIG_MODEL) are
declared as class attributes so the registry can describe a game without
creating it.
"""
import random
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel

from cabinet.config import build_model
from cabinet.engine import ArcadeEngine
from cabinet.games.game_state import GameState
from cabinet.logging import CabinetLogger, get_logger

# Ticks reporting at least this much elapsed time are skipped
MAX_TICK_SECONDS: float = 1.0


class BaseGame(ABC):
    """Abstract base class for all cabinet games.

    Class Attributes (metadata):
        NAME: Display name for the game
        DESCRIPTION: Short description of gameplay
        VERSION: Semantic version string
        AUTHOR: Author/team name
        CONTROLS: Human-readable control hints
        CONFIG_MODEL: Pydantic model holding the game's tuning constants
        LOGGER_NAME: Module name for the game's logger

    Subclasses must implement:
        - _reset(): Create entities, register callbacks, start the engine
        - get_score() -> int: Return current score

    Usage:
        class MyGame(BaseGame):
            NAME = "My Game"
            CONFIG_MODEL = MyConfig

            def _reset(self) -> None:
                self._player = self._engine.create_game_object("Player", {...})
                self._engine.play()
                self._engine.on_update(self._update)

            def get_score(self) -> int:
                return self._score
    """

    NAME: str = "Unnamed Game"
    DESCRIPTION: str = "No description"
    VERSION: str = "1.0.0"
    AUTHOR: str = "Cabinet Team"
    CONTROLS: List[str] = []
    CONFIG_MODEL: Optional[Type[BaseModel]] = None
    LOGGER_NAME: str = 'game'

    @classmethod
    def get_info(cls) -> Dict[str, Any]:
        """Get game metadata as a dictionary."""
        return {
            'name': cls.NAME,
            'description': cls.DESCRIPTION,
            'version': cls.VERSION,
            'author': cls.AUTHOR,
            'controls': list(cls.CONTROLS),
        }

    def __init__(
        self,
        engine: ArcadeEngine,
        rng: Optional[random.Random] = None,
        config: Optional[BaseModel] = None,
        **overrides: Any,
    ):
        """Initialize base game.

        Args:
            engine: Shared engine the game registers with
            rng: Random source (seed it for reproducible runs)
            config: Ready-made config model; mutually exclusive with overrides
            **overrides: Field overrides for CONFIG_MODEL

        Raises:
            ConfigError: Overrides do not validate against CONFIG_MODEL
        """
        if config is not None and overrides:
            raise ValueError("Pass either config or overrides, not both")
        self._engine = engine
        self._rng = rng or random.Random()
        if config is None and self.CONFIG_MODEL is not None:
            config = build_model(self.CONFIG_MODEL, overrides, self.NAME)
        self.config = config
        self._state = GameState.IDLE
        self.log: CabinetLogger = get_logger(self.LOGGER_NAME)

    @property
    def engine(self) -> ArcadeEngine:
        return self._engine

    @property
    def state(self) -> GameState:
        return self._state

    @abstractmethod
    def get_score(self) -> int:
        """Get current score."""
        pass

    @abstractmethod
    def _reset(self) -> None:
        """Build a fresh round and register with the engine."""
        pass

    def reset_game(self) -> bool:
        """Start a fresh round.

        Only allowed while the engine is inactive; a running round is left
        alone.

        Returns:
            True if a new round started, False if the current one continues
        """
        if self._engine.is_active:
            self.log.info("Continuing game...")
            return False
        self._state = GameState.PLAYING
        self._reset()
        return True

    def game_over(self) -> None:
        """Terminal transition: log the result and stop the engine."""
        if self._state is GameState.GAME_OVER:
            return
        self._state = GameState.GAME_OVER
        for line in self._game_over_lines():
            self.log.info(line)
        self._engine.stop()

    def _game_over_lines(self) -> List[str]:
        return [f"Game over! Score = {self.get_score()}"]

    def _skip_tick(self, dt: float) -> bool:
        """True for a degenerate tick (stall) that must not move anything."""
        if dt >= MAX_TICK_SECONDS:
            self.log.info("Time passed: %s", dt)
            return True
        return False

    @property
    def is_playing(self) -> bool:
        return self._state is GameState.PLAYING

    def status_line(self) -> str:
        """One-line HUD text."""
        return f"{self.NAME}  score {self.get_score()}  [{self._state.value}]"
