"""Engine lifecycle state.

One enum replaces the pair of "screen open" / "simulation active" flags.
The flags are still available as derived properties.

    IDLE      closed, inactive     after clear(); loop not armed
    OPEN      open, inactive       screen shown, nothing running
    RUNNING   open, active         updates and renders every tick
    PAUSED    closed, active       loop keeps re-arming, skips updates
    STOPPING  open, inactive       stop() was called; the next tick
                                   disarms the loop and settles to OPEN
"""

from enum import Enum


class EngineState(Enum):
    IDLE = "idle"
    OPEN = "open"
    RUNNING = "running"
    PAUSED = "paused"
    STOPPING = "stopping"

    @property
    def is_open(self) -> bool:
        return self in (EngineState.OPEN, EngineState.RUNNING, EngineState.STOPPING)

    @property
    def is_active(self) -> bool:
        return self in (EngineState.RUNNING, EngineState.PAUSED)

    def opened(self, open_: bool) -> 'EngineState':
        """State after the screen is shown (True) or hidden (False)."""
        if open_:
            return {
                EngineState.IDLE: EngineState.OPEN,
                EngineState.PAUSED: EngineState.RUNNING,
            }.get(self, self)
        return {
            EngineState.OPEN: EngineState.IDLE,
            EngineState.RUNNING: EngineState.PAUSED,
            EngineState.STOPPING: EngineState.IDLE,
        }.get(self, self)

    def stopped(self) -> 'EngineState':
        """State after the simulation is deactivated."""
        return {
            EngineState.RUNNING: EngineState.STOPPING,
            EngineState.PAUSED: EngineState.IDLE,
        }.get(self, self)
