"""pinsequence - Non-repeating 4-digit PIN generator with persisted state."""

from .state import PinState, format_pin
from .generator import PinSequence, advance, generate, permute, is_excluded
from .store import StateStore
from .exceptions import PinSequenceException, StoreIOError, ClockError, ExclusionLoopError

__version__ = "0.1.0"
__all__ = [
    "PinState",
    "format_pin",
    "PinSequence",
    "advance",
    "generate",
    "permute",
    "is_excluded",
    "StateStore",
    "PinSequenceException",
    "StoreIOError",
    "ClockError",
    "ExclusionLoopError",
]
