"""Host toolkit contract.

The engine talks to its host only through this protocol: panels, key
bindings, a one-shot scheduler and a millisecond clock.
"""

from typing import Callable, Dict, List, Optional, Protocol, runtime_checkable

from cabinet.host.panel import Panel
from cabinet.host.scheduler import Scheduler, TaskCallback
from cabinet.logging import get_logger

log = get_logger('host')

KeyBindCallback = Callable[[], None]


@runtime_checkable
class Host(Protocol):
    """What the engine requires from a UI toolkit."""

    def create_panel(self, parent: Optional[Panel], panel_id: str) -> Panel:
        ...

    def delete_panel(self, panel: Panel, delay: float = 0.0) -> None:
        ...

    def register_key_bind(self, key_name: str, callback: KeyBindCallback) -> None:
        ...

    def schedule(self, delay_seconds: float, callback: TaskCallback) -> int:
        ...

    def now_ms(self) -> int:
        ...


class PanelHost:
    """Shared bookkeeping for concrete hosts.

    Subclasses supply ``now_ms``; everything else (panel tree, deferred
    deletes, key binding lists, scheduling) lives here.
    """

    def __init__(self) -> None:
        self.panels: Dict[str, Panel] = {}
        self.key_binds: Dict[str, List[KeyBindCallback]] = {}
        self.scheduler = Scheduler()
        self._pending_deletes: List[tuple] = []

    def now_ms(self) -> int:
        raise NotImplementedError

    # -------------------------------------------------------------------------
    # Panels
    # -------------------------------------------------------------------------

    def create_panel(self, parent: Optional[Panel], panel_id: str) -> Panel:
        """Create a panel under ``parent``.

        Raises:
            ValueError: A live panel with the same id already exists
        """
        if panel_id in self.panels:
            raise ValueError(f"Duplicate panel id: {panel_id}")
        panel = Panel(self, panel_id, parent)
        self.panels[panel_id] = panel
        return panel

    def delete_panel(self, panel: Panel, delay: float = 0.0) -> None:
        due_ms = self.now_ms() + int(round(delay * 1000.0))
        self._pending_deletes.append((due_ms, panel))

    def flush_deletes(self) -> int:
        """Remove panels whose delete is due. Returns how many were removed."""
        now = self.now_ms()
        keep = []
        removed = 0
        for due_ms, panel in self._pending_deletes:
            if due_ms > now:
                keep.append((due_ms, panel))
                continue
            panel.deleted = True
            if self.panels.get(panel.panel_id) is panel:
                del self.panels[panel.panel_id]
            removed += 1
        self._pending_deletes = keep
        return removed

    def children_of(self, parent: Panel) -> List[Panel]:
        return [panel for panel in self.panels.values() if panel.parent is parent]

    # -------------------------------------------------------------------------
    # Keys
    # -------------------------------------------------------------------------

    def register_key_bind(self, key_name: str, callback: KeyBindCallback) -> None:
        """Bind ``callback`` to ``key_name``. Bindings accumulate per key."""
        self.key_binds.setdefault(key_name, []).append(callback)

    def dispatch_key(self, key_name: str) -> int:
        """Invoke every binding for ``key_name``. Returns how many ran."""
        callbacks = list(self.key_binds.get(key_name, ()))
        if not callbacks:
            log.trace("Unbound key %s", key_name)
        for callback in callbacks:
            callback()
        return len(callbacks)

    # -------------------------------------------------------------------------
    # Scheduling
    # -------------------------------------------------------------------------

    def schedule(self, delay_seconds: float, callback: TaskCallback) -> int:
        return self.scheduler.call_later(self.now_ms(), delay_seconds, callback)

    def run_scheduled(self) -> int:
        """Run due callbacks, then apply due panel deletes."""
        executed = self.scheduler.run_due(self.now_ms())
        self.flush_deletes()
        return executed
