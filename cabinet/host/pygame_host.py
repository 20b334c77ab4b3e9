"""Pygame window host.

Draws every visible panel as a filled rectangle, turns key presses into
``key_<Name>`` bindings, tracks pointer hover over panels and runs the
one-shot scheduler once per display frame.
"""

from typing import Callable, List, Optional, Tuple

import pygame

from cabinet.host.base import PanelHost
from cabinet.host.panel import Panel
from cabinet.logging import get_logger

log = get_logger('host')

BACKGROUND_COLOR: Tuple[int, int, int] = (12, 12, 18)
HUD_COLOR: Tuple[int, int, int] = (220, 220, 220)


def key_name_for(key: int) -> str:
    """Translate a pygame key code into the host binding name.

    >>> key_name_for(pygame.K_w)
    'key_W'
    >>> key_name_for(pygame.K_SPACE)
    'key_Space'
    """
    name = pygame.key.name(key)
    if len(name) == 1:
        name = name.upper()
    else:
        name = name.title().replace(' ', '')
    return f"key_{name}"


class PygameHost(PanelHost):
    """Host backed by a pygame display surface.

    Args:
        width: Window width in pixels
        height: Window height in pixels
        caption: Window title
        fps: Display frame cap; the scheduler is polled once per frame
    """

    def __init__(
        self,
        width: int = 1280,
        height: int = 720,
        caption: str = "Cabinet",
        fps: int = 120,
    ):
        super().__init__()
        pygame.init()
        pygame.font.init()
        self.screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption(caption)
        self._clock = pygame.time.Clock()
        self._fps = fps
        self._font = pygame.font.Font(None, 24)
        self._hovered: Optional[Panel] = None
        self.running = False
        self.hud_lines: Callable[[], List[str]] = lambda: []

    def now_ms(self) -> int:
        return pygame.time.get_ticks()

    # -------------------------------------------------------------------------
    # Main loop
    # -------------------------------------------------------------------------

    def run(self) -> None:
        """Pump events, run due callbacks and draw until the window closes."""
        self.running = True
        log.info("Window open (%dx%d)", *self.screen.get_size())
        while self.running:
            self._clock.tick(self._fps)
            for event in pygame.event.get():
                self._handle_event(event)
            self.run_scheduled()
            self._draw()
            pygame.display.flip()
        log.debug("Window closed with %d callbacks pending", self.scheduler.queued_task_count)
        self.scheduler.clear()
        pygame.quit()

    def stop(self) -> None:
        self.running = False

    def _handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN:
            self.dispatch_key(key_name_for(event.key))
        elif event.type == pygame.MOUSEMOTION:
            self._update_hover(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            for panel in self._roots():
                if panel.screen_rect().collidepoint(event.pos):
                    panel.fire('onactivate')

    def _update_hover(self, pos: Tuple[int, int]) -> None:
        hit = None
        # Topmost first: later panels draw over earlier ones
        for panel in reversed(list(self.panels.values())):
            if panel.parent is None or not panel.visible:
                continue
            if panel.screen_rect().collidepoint(pos):
                hit = panel
                break
        if hit is self._hovered:
            return
        if self._hovered is not None:
            self._hovered.fire('onmouseout')
        self._hovered = hit
        if hit is not None:
            hit.fire('onmouseover')

    # -------------------------------------------------------------------------
    # Drawing
    # -------------------------------------------------------------------------

    def _roots(self) -> List[Panel]:
        return [panel for panel in self.panels.values() if panel.parent is None]

    def _draw(self) -> None:
        self.screen.fill(BACKGROUND_COLOR)
        for root in self._roots():
            self._draw_tree(root)
        for i, line in enumerate(self.hud_lines()):
            text = self._font.render(line, True, HUD_COLOR)
            self.screen.blit(text, (8, 8 + i * 22))

    def _draw_tree(self, panel: Panel) -> None:
        if not panel.visible:
            return
        color = pygame.Color(panel.style['backgroundColor'])
        color.a = int(color.a * panel.style['opacity'])
        rect = panel.screen_rect()
        if color.a == 255:
            pygame.draw.rect(self.screen, color, rect)
        elif color.a > 0 and rect.width > 0 and rect.height > 0:
            overlay = pygame.Surface(rect.size, pygame.SRCALPHA)
            overlay.fill(color)
            self.screen.blit(overlay, rect.topleft)
        for child in self.children_of(panel):
            self._draw_tree(child)
