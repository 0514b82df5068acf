"""
Dig — Core Module
Contains the container and grabber entities and the environment that owns them.
"""

from .container import Container, ContainerId
from .grabber import Grabber, GrabberId, GrabberState, GrabStatus, GrabResult
from .environment import Environment, InvalidHandleError, InputValidationError

__all__ = [
    # Container
    "Container",
    "ContainerId",

    # Grabber
    "Grabber",
    "GrabberId",
    "GrabberState",
    "GrabStatus",
    "GrabResult",

    # Environment
    "Environment",
    "InvalidHandleError",
    "InputValidationError",
]
