"""
ArcadeEngine - entity registry, update loop and key dispatch.

The engine is driven entirely by its host:

- ``play()`` runs the first tick immediately; every tick re-arms itself
  through ``Host.schedule`` for ``tick_interval`` seconds later.
- A tick measures wall-clock ``dt`` since the previous tick, invokes every
  update callback with it and then renders every entity.
- A tick that finds the engine inactive does not re-arm, so the loop ends
  on its own. There is no cancellation; ``stop()`` only changes state.

Games never talk to each other. ``clear()`` detaches everything a game
registered and must run before another game is reset.

Usage:
    engine = ArcadeEngine(host)
    head = engine.create_game_object("Head", {
        "width": "12px",
        "height": "12px",
        "backgroundColor": "#39FF14",
    })
    engine.on_update(lambda dt: head.move(60 * dt, 0))
    engine.on_key_press(Key.W, lambda key: print(key))
    engine.play()
"""

from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from cabinet.engine.entity import GameObject
from cabinet.engine.keys import Key
from cabinet.engine.state import EngineState
from cabinet.host.base import Host
from cabinet.host.panel import Panel, StyleError
from cabinet.logging import get_logger

log = get_logger('engine')

StartCallback = Callable[[], None]
UpdateCallback = Callable[[float], None]
KeyCallback = Callable[[Key], None]

# Nominal loop cadence (seconds between ticks)
DEFAULT_TICK_INTERVAL: float = 0.016

# Canvas the games draw into
DEFAULT_CANVAS_SIZE: Tuple[int, int] = (648, 376)
CANVAS_COLOR: str = "#1B1B24"


class ArcadeEngine:
    """Owns entities, callbacks and the loop for whichever game is active.

    Args:
        host: Host toolkit providing panels, keys, scheduling and time
        canvas: Panel entities are parented to (created if None)
        tick_interval: Seconds between loop ticks
        canvas_size: Size of the created canvas panel
    """

    def __init__(
        self,
        host: Host,
        canvas: Optional[Panel] = None,
        tick_interval: float = DEFAULT_TICK_INTERVAL,
        canvas_size: Tuple[int, int] = DEFAULT_CANVAS_SIZE,
    ):
        if tick_interval <= 0.0:
            raise ValueError("tick_interval must be > 0")
        self._host = host
        self.tick_interval = tick_interval

        if canvas is None:
            canvas = host.create_panel(None, "ArcadeCanvas")
            canvas.add_class("canvas")
            canvas.set_style("width", f"{canvas_size[0]}px")
            canvas.set_style("height", f"{canvas_size[1]}px")
            canvas.set_style("backgroundColor", CANVAS_COLOR)
        self.canvas = canvas

        self._object_counter = 0
        self._game_objects: List[GameObject] = []
        self._start_callbacks: List[StartCallback] = []
        self._update_callbacks: List[UpdateCallback] = []
        self._key_callbacks: Dict[Key, List[KeyCallback]] = {}
        self._host_bound_keys: set = set()

        self._state = EngineState.IDLE
        self._loop_armed = False
        self._last_update_ms = host.now_ms()
        self.tick_count = 0
        self.focused_object: Optional[GameObject] = None

    # =========================================================================
    # State
    # =========================================================================

    @property
    def host(self) -> Host:
        return self._host

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def is_open(self) -> bool:
        """Whether the arcade screen is shown."""
        return self._state.is_open

    @property
    def is_active(self) -> bool:
        """Whether a game simulation is active."""
        return self._state.is_active

    @property
    def loop_armed(self) -> bool:
        """Whether a loop tick is currently scheduled."""
        return self._loop_armed

    @property
    def game_objects(self) -> Tuple[GameObject, ...]:
        """Snapshot of the live entities in creation order."""
        return tuple(self._game_objects)

    @property
    def update_callback_count(self) -> int:
        return len(self._update_callbacks)

    @property
    def start_callback_count(self) -> int:
        return len(self._start_callbacks)

    @property
    def bound_keys(self) -> Tuple[Key, ...]:
        """Keys with at least one game callback in the dispatch table."""
        return tuple(key for key, callbacks in self._key_callbacks.items() if callbacks)

    def set_open(self, open_: bool) -> None:
        """Show or hide the arcade screen.

        Hiding a running game pauses it: the loop keeps ticking but no
        update callback runs until the screen is shown again.
        """
        self._state = self._state.opened(open_)
        log.debug("Screen %s -> %s", "open" if open_ else "closed", self._state.value)

    def stop(self) -> None:
        """Deactivate the simulation. The loop ends at its next tick."""
        self._state = self._state.stopped()
        log.debug("Stop requested -> %s", self._state.value)

    # =========================================================================
    # Entities
    # =========================================================================

    def create_game_object(
        self,
        name: str,
        style: Optional[Mapping[str, Any]] = None,
        data: Any = None,
    ) -> GameObject:
        """Create an entity and its panel.

        Each style property is applied on its own; a property the host
        rejects is logged and skipped, creation itself never fails.

        Args:
            name: Display name used in diagnostics
            style: CSS-like properties for the panel
            data: Game-specific attribute record

        Returns:
            The new GameObject (already registered)
        """
        object_id = self._object_counter
        self._object_counter += 1

        panel = self._host.create_panel(self.canvas, f"CanvasObject_{object_id}")
        game_object = GameObject(self, object_id, name, panel, data)

        for prop, value in (style or {}).items():
            try:
                panel.set_style(prop, value)
            except StyleError as exc:
                log.warning("Error applying style for %s -> %s (%s)", game_object, prop, exc)

        panel.set_panel_event("onmouseover", lambda: self._focus(game_object))
        panel.set_panel_event("onmouseout", lambda: self._unfocus(game_object))

        self._game_objects.append(game_object)
        log.trace("Created %s", game_object)
        return game_object

    def destroy_object(self, game_object: Optional[GameObject]) -> None:
        """Release an entity's panel and drop it from the registry.

        No-op for None, for entities already destroyed and for entities
        the registry does not hold.
        """
        if game_object is None:
            return

        if game_object.panel is not None:
            game_object.panel.delete_async(0)
            game_object.panel = None
            if self.focused_object is game_object:
                self.focused_object = None

        for index, candidate in enumerate(self._game_objects):
            if candidate is game_object:
                del self._game_objects[index]
                log.trace("Destroyed %s", game_object)
                break

    def _focus(self, game_object: GameObject) -> None:
        self.focused_object = game_object
        if game_object.panel is not None:
            game_object.panel.set_focus(True)

    def _unfocus(self, game_object: GameObject) -> None:
        if self.focused_object is game_object:
            self.focused_object = None
        if game_object.panel is not None:
            game_object.panel.set_focus(False)

    # =========================================================================
    # Callbacks
    # =========================================================================

    def on_start(self, callback: StartCallback) -> None:
        """Run ``callback`` every time ``play()`` is called."""
        self._start_callbacks.append(callback)

    def on_update(self, callback: UpdateCallback) -> None:
        """Run ``callback(dt)`` every tick while the game is running."""
        self._update_callbacks.append(callback)

    def on_key_press(self, key: Key, callback: KeyCallback) -> None:
        """Run ``callback(key)`` whenever ``key`` is pressed.

        The host binding for a key is registered once per engine and fans
        out to whatever callbacks the dispatch table holds at press time.
        """
        if key not in self._host_bound_keys:
            self._host_bound_keys.add(key)
            self._host.register_key_bind(key.host_name, lambda: self._dispatch_key(key))
        self._key_callbacks.setdefault(key, []).append(callback)

    def _dispatch_key(self, key: Key) -> None:
        # Bound by a previous game and cleared since
        callbacks = self._key_callbacks.get(key)
        if not callbacks:
            return
        for callback in list(callbacks):
            callback(key)

    # =========================================================================
    # Loop
    # =========================================================================

    def play(self) -> None:
        """Activate the simulation and start the loop if it is not running."""
        log.info("Game started!")
        self._state = EngineState.RUNNING

        for callback in list(self._start_callbacks):
            callback()

        if self._loop_armed:
            # A tick is still pending from before stop(); it carries on.
            return
        self._loop_armed = True
        self._last_update_ms = self._host.now_ms()
        self.tick()

    def tick(self) -> None:
        """One loop step. Re-arms itself while the simulation is active."""
        now = self._host.now_ms()
        dt = (now - self._last_update_ms) / 1000.0
        self._last_update_ms = now

        state = self._state
        if not state.is_active:
            self._loop_armed = False
            if state is EngineState.STOPPING:
                self._state = EngineState.OPEN
            log.debug("Loop ended after %d ticks", self.tick_count)
            return

        self._host.schedule(self.tick_interval, self.tick)
        if state is not EngineState.RUNNING:
            return

        self.tick_count += 1
        for callback in list(self._update_callbacks):
            callback(dt)

        for game_object in list(self._game_objects):
            game_object.update()

    # =========================================================================
    # Reset
    # =========================================================================

    def clear(self) -> None:
        """Destroy every entity and detach every game callback.

        Host key bindings stay registered; they dispatch to an empty table
        until a game binds the key again.
        """
        for index in range(len(self._game_objects) - 1, -1, -1):
            self._game_objects[index].destroy()

        self._update_callbacks.clear()
        self._start_callbacks.clear()
        self._key_callbacks = {}
        self.focused_object = None
        self._state = EngineState.IDLE
        log.debug("Engine cleared")
