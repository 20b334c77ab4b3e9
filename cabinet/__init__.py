"""
Cabinet - a tick-driven arcade engine and the games that run on it.

Provides:
- engine: ArcadeEngine, GameObject, Key, EngineState
- host: Host protocol, HeadlessHost, PygameHost (lazy), Scheduler
- games: BaseGame and GameState for game implementations
- controller: ArcadeController menu layer
- config: CabinetSettings and YAML loading
- logging: per-module leveled loggers
"""

__version__ = "1.0.0"
