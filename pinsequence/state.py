"""Persisted generator state and its on-disk layout."""

from dataclasses import dataclass
from typing import Optional
import struct

RING_SIZE = 10000
BOUNDARY_INDEX = RING_SIZE - 1
PIN_WIDTH = 4

# [INDEX int32 LE][SALT int32 LE]
STATE_FORMAT = '<ii'
STATE_SIZE = struct.calcsize(STATE_FORMAT)

_INT32_MIN = -2 ** 31
_INT32_MAX = 2 ** 31 - 1


def format_pin(pin: int) -> str:
    """Render a PIN zero padded to four digits."""
    return f"{pin:0{PIN_WIDTH}d}"


@dataclass(frozen=True)
class PinState:
    """Position of the generator within the current salt epoch.

    ``index`` is the ring position of the last emitted PIN. The value
    ``BOUNDARY_INDEX`` means the epoch is exhausted and the next step draws a
    new salt. ``salt`` is ``None`` only before the very first draw.
    """
    index: int
    salt: Optional[int]

    def __post_init__(self):
        if not 0 <= self.index <= BOUNDARY_INDEX:
            raise ValueError(f"index must be in [0, {BOUNDARY_INDEX}], got {self.index}")

    @classmethod
    def initial(cls) -> 'PinState':
        """State used when nothing has been persisted yet."""
        return cls(index=BOUNDARY_INDEX, salt=None)

    def to_bytes(self) -> bytes:
        """Convert state to bytes for the state file."""
        if self.salt is None:
            raise ValueError("Cannot encode a state that has no salt yet")
        if not _INT32_MIN <= self.salt <= _INT32_MAX:
            raise ValueError(f"salt {self.salt} does not fit in a signed 32-bit integer")
        return struct.pack(STATE_FORMAT, self.index, self.salt)

    @classmethod
    def from_bytes(cls, data: bytes) -> Optional['PinState']:
        """Parse state from bytes."""
        if len(data) != STATE_SIZE:
            return None

        index, salt = struct.unpack(STATE_FORMAT, data)
        if not 0 <= index <= BOUNDARY_INDEX:
            return None

        return cls(index=index, salt=salt)
