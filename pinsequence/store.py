"""State file persistence for the PIN generator."""

import logging
import os

from .state import PinState, STATE_SIZE
from .exceptions import StoreIOError

logger = logging.getLogger(__name__)

DEFAULT_STATE_FILE = "randomFile.bin"


class StateStore:
    """Reads and writes the ``(index, salt)`` pair between runs.

    The file holds exactly one state in the layout produced by
    ``PinState.to_bytes``. Removing the file resets the sequence.
    """

    def __init__(self, path: str = DEFAULT_STATE_FILE, mode: int = 0o700):
        """Initialize the store.

        Args:
            path: Location of the state file (default: "randomFile.bin")
            mode: Permission bits used when the file is created (default: 0o700)
        """
        self.path = path
        self.mode = mode

    def exists(self) -> bool:
        """Check if a state file is present."""
        return os.path.exists(self.path)

    def load(self) -> PinState:
        """Load the persisted state.

        Returns:
            PinState: The state written by the last save()

        Raises:
            StoreIOError: If the file cannot be read or does not hold a valid state
        """
        try:
            with open(self.path, 'rb') as fh:
                data = fh.read(STATE_SIZE + 1)
        except OSError as e:
            raise StoreIOError(f"Failed to read state file {self.path}: {e}") from e

        state = PinState.from_bytes(data)
        if state is None:
            raise StoreIOError(
                f"State file {self.path} is corrupt: expected {STATE_SIZE} bytes "
                f"with an index in range, got {len(data)} bytes"
            )

        logger.info(f"Loaded state index={state.index}, salt={state.salt} from {self.path}")
        return state

    def load_or_initial(self) -> PinState:
        """Load the persisted state, or the first-run state if there is none."""
        if self.exists():
            return self.load()
        logger.info(f"No state file at {self.path}, starting a new sequence")
        return PinState.initial()

    def save(self, state: PinState):
        """Overwrite the state file with ``state``.

        The new state is written to a temporary file next to the state file
        and renamed over it, so a failed save leaves the previous state.

        Args:
            state: State to persist

        Raises:
            StoreIOError: If the file cannot be created or written
        """
        data = state.to_bytes()
        tmp_path = f"{self.path}.tmp"
        try:
            fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, self.mode)
            with os.fdopen(fd, 'wb') as fh:
                fh.write(data)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise StoreIOError(f"Failed to write state file {self.path}: {e}") from e

        logger.debug(f"Wrote state bytes: {data.hex()}")
        logger.info(f"Saved state index={state.index}, salt={state.salt} to {self.path}")
