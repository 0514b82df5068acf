"""
Dig — Grabber Classes
Timed transfer agents moving volume from one container to another.
"""

from dataclasses import dataclass
from enum import Enum, auto

from .container import ContainerId


@dataclass(frozen=True)
class GrabberId:
    """Handle of a grabber inside one Environment."""
    index: int
    owner: int = 0

    def __repr__(self) -> str:
        return f"GrabberId({self.index})"


@dataclass(frozen=True)
class Grabber:
    """
    Configuration of a grabber.

    A grabber takes up to `capacity` from `source` when activated and
    puts it into `target` once `duration` time units have passed.
    """
    capacity: float
    duration: float
    source: ContainerId
    target: ContainerId


@dataclass
class GrabberState:
    """Runtime state of a grabber (paired with its Grabber by index)."""
    remaining_time: float = 0.0     # 0 = idle
    in_transit_volume: float = 0.0  # Unavailable to both containers

    # Statistics
    transfers_started: int = 0
    transfers_completed: int = 0
    total_volume_moved: float = 0.0

    @property
    def is_idle(self) -> bool:
        return self.remaining_time == 0.0

    @property
    def is_busy(self) -> bool:
        return not self.is_idle

    def get_status(self) -> dict:
        return {
            "remaining_time": self.remaining_time,
            "in_transit_volume": self.in_transit_volume,
            "is_busy": self.is_busy,
            "transfers_started": self.transfers_started,
            "transfers_completed": self.transfers_completed,
            "total_volume_moved": self.total_volume_moved,
        }


class GrabStatus(Enum):
    """Outcome of a grab request."""
    ACTIVATED = auto()  # Transfer started
    BUSY = auto()       # Already in transit, nothing changed


@dataclass
class GrabResult:
    """Result of asking a grabber to start a transfer."""
    status: GrabStatus
    grabber: GrabberId
    volume: float = 0.0  # Volume withdrawn from the source

    @property
    def success(self) -> bool:
        return self.status is GrabStatus.ACTIVATED

    def __bool__(self) -> bool:
        return self.success
