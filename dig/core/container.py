"""
Dig — Container Class
Stores a volume of some unknown material.
"""

from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContainerId:
    """Handle of a container inside one Environment."""
    index: int
    owner: int = 0

    def __repr__(self) -> str:
        return f"ContainerId({self.index})"


@dataclass
class Container:
    """
    A container holding some volume of material.

    The amount never drops below zero through `take`; a grabber asking
    for more than is stored gets whatever is left.
    """

    amount: float = 0.0

    # Historical tracking
    total_put: float = 0.0
    total_taken: float = 0.0

    @property
    def is_empty(self) -> bool:
        return self.amount <= 0.0

    def put(self, v: float):
        """Add some volume to the container."""
        self.amount += v
        self.total_put += v

    def take(self, v: float) -> float:
        """
        Take some volume from the container.

        Args:
            v: Volume requested

        Returns:
            Volume actually taken. Equals the whole amount when the
            container holds `v` or less, otherwise exactly `v`.
        """
        if self.amount <= v:
            taken = self.amount
            self.amount = 0.0
            if taken < v:
                logger.debug(f"Partial take: {taken:.3f} of {v:.3f} requested")
        else:
            self.amount -= v
            taken = v

        self.total_taken += taken
        return taken

    def get_status(self) -> dict:
        """Get current status as dictionary."""
        return {
            "amount": self.amount,
            "is_empty": self.is_empty,
            "total_put": self.total_put,
            "total_taken": self.total_taken,
        }

    def __repr__(self) -> str:
        return f"Container({self.amount:.3f})"
