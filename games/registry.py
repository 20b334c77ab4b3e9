"""
Game Registry - Auto-discovery of cabinet games.

Games are discovered by scanning the games/ directory for subdirectories
containing a game_mode.py with a class inheriting from BaseGame.

Game metadata is read from the game class itself (BaseGame class
attributes), so listing games never creates one.

Usage:
    from games.registry import get_registry

    registry = get_registry()
    available = registry.list_games()  # ['guidedowl', 'pong', 'viper']

    info = registry.get_game_info('pong')
    game = registry.create_game('pong', engine, win_score=3)
"""

import importlib
import inspect
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Type

from cabinet.engine import ArcadeEngine
from cabinet.games.base_game import BaseGame
from cabinet.logging import get_logger

log = get_logger('registry')

GAMES_DIR = Path(__file__).resolve().parent


class UnknownGameError(KeyError):
    """Raised for a slug no registered game answers to."""

    def __init__(self, slug: str, available: List[str]):
        super().__init__(slug)
        self.slug = slug
        self.available = available

    def __str__(self) -> str:
        return f"Unknown game: {self.slug}. Available: {', '.join(self.available)}"


@dataclass
class GameInfo:
    """Information about a registered game."""
    name: str
    slug: str  # lowercase identifier (directory name)
    description: str
    version: str
    author: str
    module_path: str  # e.g., 'games.Pong'
    controls: List[str] = field(default_factory=list)
    has_config: bool = False


class GameRegistry:
    """
    Registry for auto-discovering cabinet games.

    Discovery works by:
    1. Looking for game_mode.py in each game directory
    2. Importing it as games.<Dir>.game_mode
    3. Taking the first class defined there that inherits from BaseGame
    4. Reading metadata from its class attributes (NAME, DESCRIPTION, etc.)
    """

    def __init__(self, games_dir: Path = GAMES_DIR, package: str = 'games'):
        self._games_dir = games_dir
        self._package = package
        self._games: Dict[str, GameInfo] = {}
        self._game_classes: Dict[str, Type[BaseGame]] = {}
        self._discover_games()

    def _discover_games(self) -> None:
        if not self._games_dir.exists():
            log.warning("Games directory missing: %s", self._games_dir)
            return

        for game_dir in sorted(self._games_dir.iterdir()):
            if not game_dir.is_dir():
                continue
            if game_dir.name.startswith('_') or game_dir.name.startswith('.'):
                continue
            if (game_dir / 'game_mode.py').exists():
                self._register_game(game_dir)

    def _register_game(self, game_dir: Path) -> None:
        """Register the game living in ``game_dir``; failures are logged and skipped."""
        slug = game_dir.name.lower()
        module_path = f"{self._package}.{game_dir.name}"

        try:
            game_class = self._find_game_class(module_path)
        except Exception:
            log.exception("Failed to load game from %s", game_dir)
            return

        if game_class is None:
            log.warning("No BaseGame subclass in %s/game_mode.py", game_dir.name)
            return

        self._game_classes[slug] = game_class
        self._games[slug] = GameInfo(
            name=game_class.NAME,
            slug=slug,
            description=game_class.DESCRIPTION,
            version=game_class.VERSION,
            author=game_class.AUTHOR,
            module_path=module_path,
            controls=list(game_class.CONTROLS),
            has_config=(game_dir / 'config.py').exists(),
        )
        log.debug("Registered %s (%s)", slug, game_class.__name__)

    @staticmethod
    def _find_game_class(module_path: str) -> Optional[Type[BaseGame]]:
        module = importlib.import_module(f"{module_path}.game_mode")
        for _, obj in inspect.getmembers(module, inspect.isclass):
            # Only classes defined in this module
            if obj.__module__ != module.__name__:
                continue
            if issubclass(obj, BaseGame) and obj is not BaseGame and not inspect.isabstract(obj):
                return obj
        return None

    def list_games(self) -> List[str]:
        """Get sorted list of available game slugs."""
        return sorted(self._games.keys())

    def get_game_info(self, slug: str) -> Optional[GameInfo]:
        """
        Get information about a specific game.

        Args:
            slug: Game identifier (case-insensitive)

        Returns:
            GameInfo or None if not found
        """
        return self._games.get(slug.lower())

    def get_game_class(self, slug: str) -> Type[BaseGame]:
        """
        Get the game class for a slug.

        Raises:
            UnknownGameError: If no game is registered under ``slug``
        """
        game_class = self._game_classes.get(slug.lower())
        if game_class is None:
            raise UnknownGameError(slug, self.list_games())
        return game_class

    def create_game(self, slug: str, engine: ArcadeEngine, **kwargs: Any) -> BaseGame:
        """
        Create a game instance bound to ``engine``.

        Args:
            slug: Game identifier
            engine: Engine the game registers with
            **kwargs: Passed to the game constructor (rng, config or overrides)

        Raises:
            UnknownGameError: If game not found
            ConfigError: If overrides do not validate
        """
        return self.get_game_class(slug)(engine, **kwargs)


# Shared instance for convenience
_registry: Optional[GameRegistry] = None


def get_registry() -> GameRegistry:
    """Get the global game registry instance."""
    global _registry
    if _registry is None:
        _registry = GameRegistry()
    return _registry
