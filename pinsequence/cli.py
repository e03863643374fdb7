"""Command-line entry point: print the next PINs and remember the position.

Usage: makepin [count] [--state-file PATH] [--verbose]
"""

import argparse
import logging
import sys
from typing import List, Optional

from .generator import generate
from .state import format_pin
from .store import StateStore, DEFAULT_STATE_FILE
from .exceptions import StoreIOError, ClockError, ExclusionLoopError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_STORE_ERROR = 1
EXIT_USAGE = 2  # argparse
EXIT_CLOCK_ERROR = 3
EXIT_INTERNAL_ERROR = 4


def _count(value: str) -> int:
    try:
        count = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid count: {value!r}")
    if count < 0:
        raise argparse.ArgumentTypeError(f"count must be non-negative, got {count}")
    return count


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="makepin",
        description="Print non-repeating 4-digit PINs, continuing from the last run.",
    )
    parser.add_argument(
        "count",
        nargs="?",
        type=_count,
        default=1,
        help="How many PINs to print (default: 1)",
    )
    parser.add_argument(
        "--state-file",
        default=DEFAULT_STATE_FILE,
        help=f"Where the generator position is kept (default: {DEFAULT_STATE_FILE})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log generator and state file activity to stderr",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    store = StateStore(args.state_file)
    try:
        state = store.load_or_initial()
        state, pins = generate(state, args.count)
        # Save before printing so every printed PIN is on disk
        if pins:
            store.save(state)
    except StoreIOError as e:
        logger.error(str(e))
        return EXIT_STORE_ERROR
    except ClockError as e:
        logger.error(str(e))
        return EXIT_CLOCK_ERROR
    except ExclusionLoopError as e:
        logger.error(str(e))
        return EXIT_INTERNAL_ERROR

    for pin in pins:
        print(format_pin(pin))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
