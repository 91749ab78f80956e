from adapters.telegram.states.forms import (
    RegistrationStates,
    SubstituteStates,
    WaiverStates,
)

__all__ = [
    "RegistrationStates",
    "SubstituteStates",
    "WaiverStates",
]
