"""Custom exceptions for pinsequence."""


class PinSequenceException(Exception):
    """Base exception for pinsequence."""
    pass


class StoreIOError(PinSequenceException):
    """Exception raised when the state file cannot be read or written."""
    pass


class ClockError(PinSequenceException):
    """Exception raised when the wall clock cannot be read."""
    pass


class ExclusionLoopError(PinSequenceException):
    """Exception raised when no valid PIN is found within one ring of candidates."""
    pass
