"""Headless host with a manual clock.

Runs the engine without a window: time only moves when ``advance`` is
called and keys only arrive through ``press``. Used for automated tests
and scripted simulations.

Usage:
    host = HeadlessHost()
    engine = ArcadeEngine(host)
    game = ViperMode(engine, rng=random.Random(3))
    game.reset_game()

    host.press('key_S')
    host.advance(500)      # ~31 ticks at 16 ms
"""

from typing import Optional

from cabinet.host.base import PanelHost
from cabinet.host.panel import Panel


class HeadlessHost(PanelHost):
    """Deterministic host driven by explicit clock steps."""

    def __init__(self, start_ms: int = 0):
        super().__init__()
        self._now_ms = start_ms
        self.pointer_panel: Optional[Panel] = None
        self.canvas: Optional[Panel] = None

    def now_ms(self) -> int:
        return self._now_ms

    def advance(self, ms: int) -> int:
        """Move the clock forward by ``ms``, running callbacks as they fall due.

        Self re-arming callbacks are stepped one due time at a time, so a
        16 ms loop advanced by 160 ms ticks ten times.

        Returns:
            Number of callbacks executed
        """
        if ms < 0:
            raise ValueError("ms must be >= 0")
        target = self._now_ms + ms
        executed = 0
        while True:
            due = self.scheduler.next_due_ms
            if due is None or due > target:
                break
            self._now_ms = max(self._now_ms, due)
            executed += self.run_scheduled()
        self._now_ms = target
        executed += self.run_scheduled()
        return executed

    def press(self, key_name: str) -> int:
        """Deliver a key press. Returns how many host bindings ran."""
        return self.dispatch_key(key_name)

    def hover(self, panel: Optional[Panel]) -> None:
        """Move the pointer onto ``panel`` (or off every panel with None)."""
        if self.pointer_panel is panel:
            return
        if self.pointer_panel is not None:
            self.pointer_panel.fire('onmouseout')
        self.pointer_panel = panel
        if panel is not None:
            panel.fire('onmouseover')

    def activate(self) -> bool:
        """Click the canvas panel (if one was created as a root panel)."""
        if self.canvas is None:
            return False
        return self.canvas.fire('onactivate')

    def create_panel(self, parent: Optional[Panel], panel_id: str) -> Panel:
        panel = super().create_panel(parent, panel_id)
        if parent is None and self.canvas is None:
            self.canvas = panel
        return panel
