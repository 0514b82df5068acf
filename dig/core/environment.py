"""
Dig — Environment
Owns containers and grabbers and implements the transfer protocol.

The Environment is the internal environment only. Deciding when to grab,
how far to advance time and when to stop is left to an external driver:

    env = Environment()
    a = env.create_container(1.0)
    b = env.create_container(0.0)
    ab = env.create_grabber(capacity=1.0, duration=1.0, source=a, target=b)

    env.activate(ab)
    env.advance(1.0)
    env.query_volume(b)  # 1.0
"""

from typing import Dict, Iterator, List, Tuple
import itertools
import logging
import math

from .container import Container, ContainerId
from .grabber import Grabber, GrabberId, GrabberState, GrabResult, GrabStatus
from ..config import EnvironmentConfig, ENVIRONMENT

logger = logging.getLogger(__name__)

_owner_tokens = itertools.count(1)


# =============================================================================
# EXCEPTIONS
# =============================================================================

class InvalidHandleError(IndexError):
    """Handle does not refer to an entity of this Environment."""
    pass


class InputValidationError(ValueError):
    """Rejected a negative or non-finite input (strict mode only)."""
    pass


# =============================================================================
# ENVIRONMENT
# =============================================================================

class Environment:
    """
    Containers, grabbers and grabber states stored in flat lists.

    Entities are addressed by handles carrying their list index, so a
    grabber refers to its containers without holding them. Nothing is ever
    removed, which keeps every handle valid for the lifetime of the
    Environment that created it.
    """

    def __init__(self, config: EnvironmentConfig = ENVIRONMENT):
        self.config = config

        self._token = next(_owner_tokens)
        self._containers: List[Container] = []
        self._grabbers: List[Grabber] = []
        self._grabber_states: List[GrabberState] = []

        # Sum of all deltas passed to advance()
        self.elapsed_time = 0.0

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    def create_container(self, initial_amount: float) -> ContainerId:
        """Add a new container holding `initial_amount`."""
        self._check_input("initial_amount", initial_amount)

        cid = ContainerId(len(self._containers), self._token)
        self._containers.append(Container(initial_amount))
        logger.debug(f"Created {cid} with amount {initial_amount}")
        return cid

    def create_grabber(
        self,
        capacity: float,
        duration: float,
        source: ContainerId,
        target: ContainerId,
    ) -> GrabberId:
        """
        Add a new grabber moving material from `source` to `target`.

        The grabber starts idle. In permissive mode the container handles
        are only checked when the grabber is used.
        """
        self._check_input("capacity", capacity)
        self._check_input("duration", duration)

        if self.config.validate_inputs:
            self._container(source)
            self._container(target)

        if source == target and not self.config.allow_self_transfer:
            logger.error(f"Grabber source and target are both {source}")
            raise InputValidationError(f"Self transfer not allowed: {source}")

        gid = GrabberId(len(self._grabbers), self._token)
        self._grabbers.append(Grabber(capacity, duration, source, target))
        self._grabber_states.append(GrabberState())
        logger.debug(
            f"Created {gid}: {source} -> {target} "
            f"(capacity {capacity}, duration {duration})"
        )
        return gid

    # -------------------------------------------------------------------------
    # Transfer protocol
    # -------------------------------------------------------------------------

    def activate(self, grabber: GrabberId) -> GrabResult:
        """
        Start a transfer, unless the grabber is busy.

        The volume is withdrawn from the source right away and stays in
        transit until `advance` has covered the grabber's duration.

        Returns:
            GrabResult with status ACTIVATED and the withdrawn volume, or
            status BUSY if a transfer is already in flight (no changes made).
        """
        g = self.grabber(grabber)
        state = self._grabber_states[grabber.index]

        if not state.is_idle:
            logger.debug(f"{grabber}: busy ({state.remaining_time} remaining)")
            return GrabResult(GrabStatus.BUSY, grabber)

        # Resolve both handles before touching any container
        source = self._container(g.source)
        self._container(g.target)

        volume = source.take(g.capacity)
        state.in_transit_volume = volume
        state.remaining_time = g.duration
        state.transfers_started += 1
        logger.debug(f"{grabber}: took {volume} from {g.source}")

        # A zero-duration transfer would read idle while still carrying cargo
        if g.duration == 0.0:
            self._deposit(grabber.index)

        return GrabResult(GrabStatus.ACTIVATED, grabber, volume)

    def advance(self, delta_time: float):
        """
        Move time forward by `delta_time` for every grabber.

        A grabber whose remaining time runs out puts its whole cargo into
        the target. Time left over after completion is dropped; it does not
        count toward the next transfer.
        """
        self._check_input("delta_time", delta_time)

        # Resolve every target before changing any state
        for g in self._grabbers:
            self._container(g.target)

        for i, state in enumerate(self._grabber_states):
            state.remaining_time -= delta_time
            if state.remaining_time <= 0.0:
                self._deposit(i)

        self.elapsed_time += delta_time

    def _deposit(self, index: int):
        """Put the cargo of grabber `index` into its target and go idle."""
        g = self._grabbers[index]
        state = self._grabber_states[index]
        target = self._container(g.target)

        # Idle grabbers pass through here too, with nothing to put
        if state.transfers_completed < state.transfers_started:
            state.transfers_completed += 1
            state.total_volume_moved += state.in_transit_volume
            logger.debug(
                f"{GrabberId(index, self._token)}: put {state.in_transit_volume} into {g.target}"
            )

        target.put(state.in_transit_volume)
        state.in_transit_volume = 0.0
        state.remaining_time = 0.0

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def query_volume(self, container: ContainerId) -> float:
        """The volume of a container."""
        return self._container(container).amount

    def container(self, container: ContainerId) -> Container:
        return self._container(container)

    def grabber(self, grabber: GrabberId) -> Grabber:
        if not isinstance(grabber, GrabberId):
            raise InvalidHandleError(f"Not a grabber handle: {grabber!r}")
        self._check_owner(grabber)
        if not 0 <= grabber.index < len(self._grabbers):
            raise InvalidHandleError(f"{grabber} out of range ({len(self._grabbers)} grabbers)")
        return self._grabbers[grabber.index]

    def grabber_state(self, grabber: GrabberId) -> GrabberState:
        self.grabber(grabber)
        return self._grabber_states[grabber.index]

    def is_busy(self, grabber: GrabberId) -> bool:
        return self.grabber_state(grabber).is_busy

    def remaining_time(self, grabber: GrabberId) -> float:
        return self.grabber_state(grabber).remaining_time

    def in_transit_volume(self, grabber: GrabberId) -> float:
        return self.grabber_state(grabber).in_transit_volume

    @property
    def containers(self) -> Tuple[Container, ...]:
        return tuple(self._containers)

    @property
    def grabbers(self) -> Tuple[Grabber, ...]:
        return tuple(self._grabbers)

    @property
    def grabber_states(self) -> Tuple[GrabberState, ...]:
        return tuple(self._grabber_states)

    def container_ids(self) -> Iterator[ContainerId]:
        for i in range(len(self._containers)):
            yield ContainerId(i, self._token)

    def grabber_ids(self) -> Iterator[GrabberId]:
        for i in range(len(self._grabbers)):
            yield GrabberId(i, self._token)

    def idle_grabbers(self) -> List[GrabberId]:
        """Get all grabbers that can be activated now."""
        return [gid for gid in self.grabber_ids() if self._grabber_states[gid.index].is_idle]

    def busy_grabbers(self) -> List[GrabberId]:
        """Get all grabbers with a transfer in flight."""
        return [gid for gid in self.grabber_ids() if self._grabber_states[gid.index].is_busy]

    def volume_in_transit(self) -> float:
        """Total volume currently carried by grabbers."""
        return sum(s.in_transit_volume for s in self._grabber_states)

    def total_volume(self) -> float:
        """
        Volume in all containers plus volume in transit.

        Constant across activate/advance as long as capacities and
        durations are non-negative.
        """
        return sum(c.amount for c in self._containers) + self.volume_in_transit()

    def get_status(self) -> Dict:
        """Get current environment status."""
        return {
            "elapsed_time": self.elapsed_time,
            "containers": [c.get_status() for c in self._containers],
            "grabbers": [
                {
                    "capacity": g.capacity,
                    "duration": g.duration,
                    "source": g.source.index,
                    "target": g.target.index,
                    **s.get_status(),
                }
                for g, s in zip(self._grabbers, self._grabber_states)
            ],
            "volume_in_transit": self.volume_in_transit(),
            "total_volume": self.total_volume(),
        }

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def _container(self, container: ContainerId) -> Container:
        if not isinstance(container, ContainerId):
            raise InvalidHandleError(f"Not a container handle: {container!r}")
        self._check_owner(container)
        if not 0 <= container.index < len(self._containers):
            raise InvalidHandleError(
                f"{container} out of range ({len(self._containers)} containers)"
            )
        return self._containers[container.index]

    def _check_owner(self, handle):
        if handle.owner != self._token:
            raise InvalidHandleError(f"{handle!r} belongs to another Environment")

    def _check_input(self, name: str, value: float):
        """Reject (strict) or log (permissive) negative and non-finite input."""
        if value >= 0.0 and math.isfinite(value):
            return

        if self.config.validate_inputs:
            logger.error(f"Invalid {name}: {value}")
            raise InputValidationError(f"{name} must be finite and non-negative, got {value}")

        logger.warning(f"Accepting {name} = {value} (validation disabled)")

    def __repr__(self) -> str:
        return (
            f"Environment({len(self._containers)} containers, "
            f"{len(self._grabbers)} grabbers, t={self.elapsed_time})"
        )
