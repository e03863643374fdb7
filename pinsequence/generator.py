"""Full-period PIN permutation over the ring of 10000 values."""

import logging
import threading
import time
from typing import Callable, Iterator, List, Optional, Tuple

from .state import PinState, RING_SIZE, BOUNDARY_INDEX
from .exceptions import ClockError, ExclusionLoopError

logger = logging.getLogger(__name__)

PRIME = 6277  # coprime with RING_SIZE
EXCLUSION_MODULUS = 1111

Clock = Callable[[], float]


def next_epoch_salt(clock: Optional[Clock] = None) -> int:
    """Draw the salt for a new epoch from the wall clock.

    Args:
        clock: Callable returning seconds since the epoch (default: time.time)

    Returns:
        int: Whole seconds reduced modulo RING_SIZE

    Raises:
        ClockError: If the clock cannot be read
    """
    clock = clock or time.time
    try:
        seconds = int(clock())
    except (OSError, OverflowError, ValueError) as e:
        raise ClockError(f"Unable to read the wall clock: {e}") from e
    # permute() only sees salt mod RING_SIZE
    return seconds % RING_SIZE


def permute(salt: int, index: int) -> int:
    """Map ``index`` to a PIN; a bijection on [0, RING_SIZE) for a fixed salt."""
    return (salt + index * PRIME) % RING_SIZE


def is_excluded(pin: int) -> bool:
    """True for 0000, 1111, ..., 9999."""
    return pin % EXCLUSION_MODULUS == 0


def advance(state: PinState, clock: Optional[Clock] = None) -> Tuple[PinState, int]:
    """Step to the next valid PIN.

    Excluded PINs consume their index without being emitted. When the index
    reaches BOUNDARY_INDEX the following step draws a new salt and restarts
    the scan at index 0.

    Args:
        state: Current generator state
        clock: Clock used when a new salt has to be drawn

    Returns:
        Tuple of the new state and the emitted PIN

    Raises:
        ClockError: If a new salt is needed and the clock cannot be read
        ExclusionLoopError: If no valid PIN turns up within RING_SIZE candidates
    """
    index, salt = state.index, state.salt

    for _ in range(RING_SIZE):
        if index == BOUNDARY_INDEX:
            salt = next_epoch_salt(clock)
            index = 0
            logger.debug(f"Starting new epoch with salt={salt}")
        else:
            index += 1

        pin = permute(salt, index)
        if not is_excluded(pin):
            return PinState(index=index, salt=salt), pin

        logger.debug(f"Skipping excluded PIN at index={index}")

    raise ExclusionLoopError(
        f"No valid PIN found after {RING_SIZE} candidates starting from index={state.index}"
    )


def generate(state: PinState, count: int, clock: Optional[Clock] = None) -> Tuple[PinState, List[int]]:
    """Generate ``count`` PINs starting after ``state``.

    Args:
        state: State loaded from the store (or PinState.initial())
        count: How many PINs to generate. Must be non-negative.
        clock: Clock used whenever a new epoch starts

    Returns:
        Tuple of the state to persist and the PINs in emission order

    Raises:
        ValueError: If count is negative
    """
    if count < 0:
        raise ValueError("count must be non-negative")

    pins: List[int] = []
    for _ in range(count):
        state, pin = advance(state, clock)
        pins.append(pin)
    return state, pins


class PinSequence:
    """Stateful PIN stream around :func:`advance`.

    Keeps the current state in memory and hands out PINs one at a time.
    Safe to share between threads of one process; it does not coordinate
    with other processes using the same state file.
    """

    def __init__(self, state: Optional[PinState] = None, clock: Optional[Clock] = None):
        """Initialize the sequence.

        Args:
            state: Starting state (default: PinState.initial())
            clock: Clock used for new salts (default: time.time)
        """
        self._state = state or PinState.initial()
        self._clock = clock
        self._lock = threading.Lock()

    def next(self) -> int:
        """Get the next PIN.

        Returns:
            int: Next PIN (0-9999, never a multiple of 1111)
        """
        with self._lock:
            self._state, pin = advance(self._state, self._clock)
            return pin

    def take(self, count: int) -> List[int]:
        """Get the next ``count`` PINs as one uninterrupted run."""
        with self._lock:
            self._state, pins = generate(self._state, count, self._clock)
            return pins

    def reset(self):
        """Forget the position; the next PIN starts a new epoch."""
        with self._lock:
            self._state = PinState.initial()

    @property
    def state(self) -> PinState:
        """Current state, suitable for StateStore.save()."""
        with self._lock:
            return self._state

    def __iter__(self) -> Iterator[int]:
        while True:
            yield self.next()
