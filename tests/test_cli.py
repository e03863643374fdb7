"""Tests for the makepin command."""

import os
import pytest
from unittest.mock import patch
from pinsequence.cli import (
    main,
    EXIT_OK,
    EXIT_STORE_ERROR,
    EXIT_USAGE,
    EXIT_CLOCK_ERROR,
    EXIT_INTERNAL_ERROR,
)
from pinsequence.state import PinState
from pinsequence.store import StateStore
from pinsequence.exceptions import StoreIOError, ClockError


@pytest.fixture
def state_path(tmp_path):
    return str(tmp_path / "state.bin")


def run(capsys, *argv):
    code = main(list(argv))
    return code, capsys.readouterr().out.splitlines()


class TestMain:
    """Test main entry point."""

    @patch('pinsequence.generator.next_epoch_salt', return_value=1000)
    def test_first_run(self, mock_salt, capsys, state_path):
        """Test a fresh run prints one PIN and saves the state."""
        code, lines = run(capsys, "--state-file", state_path)

        assert code == EXIT_OK
        assert lines == ["1000"]
        assert StateStore(state_path).load() == PinState(0, 1000)

    @patch('pinsequence.generator.next_epoch_salt', return_value=0)
    def test_count_and_continuation(self, mock_salt, capsys, state_path):
        """Test successive runs continue the sequence."""
        code, lines = run(capsys, "3", "--state-file", state_path)
        assert code == EXIT_OK
        assert lines == ["6277", "2554", "8831"]

        code, lines = run(capsys, "--state-file", state_path)
        assert code == EXIT_OK
        assert lines == ["5108"]
        assert StateStore(state_path).load() == PinState(4, 0)
        mock_salt.assert_called_once()

    @patch('pinsequence.generator.next_epoch_salt', return_value=7)
    def test_zero_padding(self, mock_salt, capsys, state_path):
        """Test PINs below 1000 keep four digits."""
        code, lines = run(capsys, "--state-file", state_path)

        assert code == EXIT_OK
        assert lines == ["0007"]

    def test_zero_count(self, capsys, state_path):
        """Test zero PINs prints nothing and writes nothing."""
        code, lines = run(capsys, "0", "--state-file", state_path)

        assert code == EXIT_OK
        assert lines == []
        assert not os.path.exists(state_path)

    @pytest.mark.parametrize("count", ["abc", "-3", "1.5"])
    def test_invalid_count(self, count, state_path):
        """Test bad counts are usage errors."""
        with pytest.raises(SystemExit) as exc_info:
            main([count, "--state-file", state_path])
        assert exc_info.value.code == EXIT_USAGE

    def test_unreadable_state(self, capsys, state_path):
        """Test a corrupt state file exits with the store error code."""
        with open(state_path, 'wb') as fh:
            fh.write(b'\x00')

        code, lines = run(capsys, "--state-file", state_path)
        assert code == EXIT_STORE_ERROR
        assert lines == []

    @patch('pinsequence.generator.next_epoch_salt', return_value=0)
    def test_unwritable_state(self, mock_salt, capsys, tmp_path):
        """Test a missing directory exits with the store error code."""
        path = str(tmp_path / "missing" / "state.bin")
        code, lines = run(capsys, "--state-file", path)

        assert code == EXIT_STORE_ERROR
        assert lines == []

    @patch('pinsequence.generator.next_epoch_salt', return_value=0)
    @patch('pinsequence.cli.StateStore.save', side_effect=StoreIOError("disk full"))
    def test_save_failure_prints_nothing(self, mock_save, mock_salt, capsys, state_path):
        """Test PINs are withheld when the state cannot be saved."""
        code, lines = run(capsys, "5", "--state-file", state_path)

        assert code == EXIT_STORE_ERROR
        assert lines == []
        mock_save.assert_called_once()

    def test_failed_save_keeps_previous_state(self, capsys, state_path):
        """Test a run that cannot write its state leaves the old state on disk."""
        store = StateStore(state_path)
        store.save(PinState(3, 0))

        with patch('pinsequence.store.os.fdopen') as mock_fdopen:
            fh = mock_fdopen.return_value.__enter__.return_value
            fh.write.side_effect = OSError(28, "No space left on device")
            code, lines = run(capsys, "--state-file", state_path)

        assert code == EXIT_STORE_ERROR
        assert lines == []
        assert store.load() == PinState(3, 0)

        # The next run picks up where the last successful one stopped
        code, lines = run(capsys, "--state-file", state_path)
        assert code == EXIT_OK
        assert lines == ["5108"]

    @patch('pinsequence.generator.next_epoch_salt', side_effect=ClockError("no clock"))
    def test_clock_failure(self, mock_salt, capsys, state_path):
        """Test clock failure exits with its own code and leaves no state."""
        code, lines = run(capsys, "--state-file", state_path)

        assert code == EXIT_CLOCK_ERROR
        assert code != EXIT_STORE_ERROR
        assert lines == []
        assert not os.path.exists(state_path)

    @patch('pinsequence.generator.next_epoch_salt', return_value=0)
    @patch('pinsequence.generator.is_excluded', return_value=True)
    def test_exclusion_loop(self, mock_excluded, mock_salt, capsys, state_path):
        """Test a runaway skip loop exits with the internal error code."""
        code, lines = run(capsys, "--state-file", state_path)

        assert code == EXIT_INTERNAL_ERROR
        assert lines == []
