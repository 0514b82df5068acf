"""
Dig — Configuration
Policies applied by the Environment when accepting caller input.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class EnvironmentConfig:
    """Input policy for an Environment."""

    # Reject negative/non-finite amounts, capacities, durations and deltas.
    # When False they are accepted as given and only logged.
    validate_inputs: bool = False

    # Grabbers whose source and target are the same container
    allow_self_transfer: bool = True


# Default configuration
ENVIRONMENT = EnvironmentConfig()
STRICT = EnvironmentConfig(validate_inputs=True)
