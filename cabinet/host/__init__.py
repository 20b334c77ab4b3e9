"""
Host adapters.

Provides:
- base: Host protocol and the shared PanelHost bookkeeping
- panel: Panel and CSS-like style parsing (StyleError)
- scheduler: one-shot millisecond scheduler
- headless: HeadlessHost with a manual clock
- pygame_host: PygameHost window (import it directly; it opens a display)
"""

from cabinet.host.base import Host, PanelHost
from cabinet.host.headless import HeadlessHost
from cabinet.host.panel import Panel, StyleError
from cabinet.host.scheduler import Scheduler

__all__ = [
    'Host',
    'PanelHost',
    'HeadlessHost',
    'Panel',
    'StyleError',
    'Scheduler',
]
