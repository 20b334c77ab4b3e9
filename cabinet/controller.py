"""
Arcade controller - the menu layer over one shared engine.

Owns exactly one instance of each registered game, created on first
selection, and an explicit reference to the current one. Games never
see each other: switching clears the engine before the next reset.

Usage:
    controller = ArcadeController(engine, get_registry(), settings)
    controller.select('pong')
    controller.start()
"""

import random
from typing import Dict, List, Optional

from cabinet.config import CabinetSettings
from cabinet.engine import ArcadeEngine
from cabinet.games.base_game import BaseGame
from cabinet.logging import get_logger

log = get_logger('controller')


class ArcadeController:
    """Game selection, start/continue and the menu toggle.

    Args:
        engine: The shared engine
        registry: Game registry (anything with list_games/create_game)
        settings: Source of per-game overrides
        rng: Random source handed to every game instance
    """

    def __init__(
        self,
        engine: ArcadeEngine,
        registry,
        settings: Optional[CabinetSettings] = None,
        rng: Optional[random.Random] = None,
    ):
        self._engine = engine
        self._registry = registry
        self._settings = settings or CabinetSettings()
        self._rng = rng
        self._instances: Dict[str, BaseGame] = {}
        self._current_slug: Optional[str] = None
        engine.canvas.set_panel_event('onactivate', self.on_canvas_activate)

    @property
    def engine(self) -> ArcadeEngine:
        return self._engine

    @property
    def current(self) -> Optional[BaseGame]:
        if self._current_slug is None:
            return None
        return self._instances[self._current_slug]

    @property
    def current_slug(self) -> Optional[str]:
        return self._current_slug

    @property
    def games(self) -> List[str]:
        """Selectable slugs in menu order."""
        return self._registry.list_games()

    def instance(self, slug: str) -> BaseGame:
        """The single instance for ``slug``, created on first use.

        Raises:
            UnknownGameError: Slug not registered
            ConfigError: Configured overrides do not validate
        """
        slug = slug.lower()
        game = self._instances.get(slug)
        if game is None:
            game = self._registry.create_game(
                slug, self._engine, rng=self._rng, **self._settings.game_overrides(slug)
            )
            self._instances[slug] = game
            log.debug("Created %s", type(game).__name__)
        return game

    def select(self, slug: str) -> BaseGame:
        """Make ``slug`` the current game, clearing whatever ran before.

        Selecting the current game again changes nothing.
        """
        slug = slug.lower()
        if slug == self._current_slug:
            return self.current
        game = self.instance(slug)
        self._engine.clear()
        self._current_slug = slug
        log.info("Selected %s", game.NAME)
        return game

    def start(self) -> bool:
        """Start a round of the current game, or leave a running one alone.

        Returns:
            True if a new round started
        """
        game = self.current
        if game is None:
            log.info("No game selected...")
            return False
        if self._engine.is_active:
            log.info("Continuing game...")
            return False
        self._engine.clear()
        return game.reset_game()

    def toggle_menu(self) -> bool:
        """Show or hide the arcade screen. Returns the new open flag."""
        self._engine.set_open(not self._engine.is_open)
        return self._engine.is_open

    def on_canvas_activate(self) -> None:
        focused = self._engine.focused_object
        if focused is not None:
            log.info("Canvas clicked on %s", focused)
        else:
            log.info("Canvas clicked")

    def status_line(self) -> str:
        game = self.current
        if game is None:
            return "No game selected"
        return game.status_line()
