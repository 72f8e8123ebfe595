from .config import SdftBuffers, SdftConfig, buffer_lengths
from .state import KIND_COMBINER, KIND_ENGINE, KIND_PAIRED, STATE_DTYPE, size_of_state, state_from_storage
from .traits import FloatPrecision, SdftError, SdftFailure, SignalTrait, ensure_ok

__all__ = [
    "FloatPrecision",
    "KIND_COMBINER",
    "KIND_ENGINE",
    "KIND_PAIRED",
    "STATE_DTYPE",
    "SdftBuffers",
    "SdftConfig",
    "SdftError",
    "SdftFailure",
    "SignalTrait",
    "buffer_lengths",
    "ensure_ok",
    "size_of_state",
    "state_from_storage",
]
