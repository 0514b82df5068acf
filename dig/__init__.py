"""
Dig — A simple logistic environment primitive

Containers store a volume of some unknown material. Grabbers move volume
from one container to another, taking time to do so; while moving, the
volume is unavailable to everything else. If the source does not fill the
grabber's capacity, whatever remains in it is moved.

Only the internal environment is modelled here. Time, agents and terminal
states belong to whatever drives it.
"""

__version__ = "0.1.0"

from .config import (
    ENVIRONMENT,
    STRICT,
    EnvironmentConfig,
)

from .core import (
    Container,
    ContainerId,
    Grabber,
    GrabberId,
    GrabberState,
    GrabStatus,
    GrabResult,
    Environment,
    InvalidHandleError,
    InputValidationError,
)

__all__ = [
    # Version info
    "__version__",

    # Config
    "ENVIRONMENT",
    "STRICT",
    "EnvironmentConfig",

    # Core classes
    "Container",
    "ContainerId",
    "Grabber",
    "GrabberId",
    "GrabberState",
    "GrabStatus",
    "GrabResult",
    "Environment",
    "InvalidHandleError",
    "InputValidationError",
]
