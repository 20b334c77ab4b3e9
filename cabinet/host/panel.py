"""Visual panels and their CSS-like style properties.

A panel is the only thing a host draws. Style values arrive as strings
(``"12px"``, ``"#39FF14"``, ``"64.0px 148.0px 0.0px"``) and are parsed
when assigned, so a bad value is rejected at the assignment that
introduced it.
"""

import re
from typing import Any, Callable, Dict, Optional, Tuple, TYPE_CHECKING

import pygame

if TYPE_CHECKING:
    from cabinet.host.base import Host


PanelCallback = Callable[[], None]

PANEL_EVENTS = ('onmouseover', 'onmouseout', 'onactivate')

_LENGTH_RE = re.compile(r'^\s*(-?\d+(?:\.\d+)?)\s*(px)?\s*$')


class StyleError(ValueError):
    """A style property the host does not recognise or cannot parse."""

    def __init__(self, prop: str, value: Any, reason: str):
        self.prop = prop
        self.value = value
        super().__init__(f"{prop}={value!r}: {reason}")


def parse_length(prop: str, value: Any) -> float:
    """Parse ``"12px"``, ``"48.0px"``, ``"7"`` or a number into pixels."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        match = _LENGTH_RE.match(value)
        if match:
            return float(match.group(1))
    raise StyleError(prop, value, "expected a pixel length")


def parse_position(prop: str, value: Any) -> Tuple[float, float, float]:
    """Parse ``"X.0px Y.0px Z.0px"`` into a coordinate triple."""
    if not isinstance(value, str):
        raise StyleError(prop, value, "expected 'Xpx Ypx Zpx'")
    parts = value.split()
    if len(parts) != 3:
        raise StyleError(prop, value, "expected three lengths")
    x, y, z = (parse_length(prop, part) for part in parts)
    return (x, y, z)


def parse_color(prop: str, value: Any) -> pygame.Color:
    """Parse a colour name or ``#RRGGBB[AA]`` string."""
    try:
        return pygame.Color(value)
    except (ValueError, TypeError) as exc:
        raise StyleError(prop, value, "unknown colour") from exc


def parse_opacity(prop: str, value: Any) -> float:
    try:
        opacity = float(value)
    except (TypeError, ValueError) as exc:
        raise StyleError(prop, value, "expected a number") from exc
    if not 0.0 <= opacity <= 1.0:
        raise StyleError(prop, value, "opacity must be within [0, 1]")
    return opacity


def parse_visibility(prop: str, value: Any) -> bool:
    if value == 'visible':
        return True
    if value == 'collapse':
        return False
    raise StyleError(prop, value, "expected 'visible' or 'collapse'")


STYLE_PARSERS: Dict[str, Callable[[str, Any], Any]] = {
    'width': parse_length,
    'height': parse_length,
    'margin': parse_length,
    'backgroundColor': parse_color,
    'position': parse_position,
    'opacity': parse_opacity,
    'visibility': parse_visibility,
}

DEFAULT_STYLE: Dict[str, Any] = {
    'width': 0.0,
    'height': 0.0,
    'margin': 0.0,
    'backgroundColor': pygame.Color(0, 0, 0, 0),
    'position': (0.0, 0.0, 0.0),
    'opacity': 1.0,
    'visibility': True,
}


class Panel:
    """A rectangular visual owned by a host.

    Attributes:
        panel_id: Unique name within the host
        parent: Parent panel (None for a root panel)
        style: Parsed style values keyed by property name
        focused: Whether the panel currently holds pointer focus
        deleted: True once the host has removed the panel
    """

    def __init__(self, host: 'Host', panel_id: str, parent: Optional['Panel'] = None):
        self._host = host
        self.panel_id = panel_id
        self.parent = parent
        self.style: Dict[str, Any] = dict(DEFAULT_STYLE)
        self.raw_style: Dict[str, Any] = {}
        self.classes: set = set()
        self.focused = False
        self.delete_pending = False
        self.deleted = False
        self._events: Dict[str, PanelCallback] = {}

    def set_style(self, prop: str, value: Any) -> None:
        """Assign one style property.

        Raises:
            StyleError: Unknown property or unparsable value
        """
        parser = STYLE_PARSERS.get(prop)
        if parser is None:
            raise StyleError(prop, value, "unknown style property")
        self.style[prop] = parser(prop, value)
        self.raw_style[prop] = value

    def add_class(self, name: str) -> None:
        self.classes.add(name)

    def set_panel_event(self, event: str, callback: PanelCallback) -> None:
        """Register the callback for a panel event (replaces any previous one)."""
        if event not in PANEL_EVENTS:
            raise ValueError(f"Unknown panel event: {event}")
        self._events[event] = callback

    def fire(self, event: str) -> bool:
        """Invoke the callback for ``event``. Returns False if none is set."""
        callback = self._events.get(event)
        if callback is None or self.deleted:
            return False
        callback()
        return True

    def set_focus(self, focused: bool) -> None:
        self.focused = focused

    def delete_async(self, delay: float = 0.0) -> None:
        """Ask the host to remove this panel on a later flush."""
        if self.delete_pending or self.deleted:
            return
        self.delete_pending = True
        self._host.delete_panel(self, delay)

    @property
    def visible(self) -> bool:
        return bool(self.style['visibility']) and not self.deleted

    def local_rect(self) -> pygame.Rect:
        """Border box relative to the parent, margin included in the offset."""
        x, y, _ = self.style['position']
        margin = self.style['margin']
        return pygame.Rect(
            int(x + margin),
            int(y + margin),
            int(self.style['width']),
            int(self.style['height']),
        )

    def screen_rect(self) -> pygame.Rect:
        """Border box in host coordinates, following the parent chain."""
        rect = self.local_rect()
        parent = self.parent
        while parent is not None:
            offset = parent.local_rect()
            rect.move_ip(offset.x, offset.y)
            parent = parent.parent
        return rect

    def __repr__(self) -> str:
        return f"Panel({self.panel_id!r})"
