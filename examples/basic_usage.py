#!/usr/bin/env python3
"""Example usage of the pinsequence library.

Hands out PINs from a shared in-memory sequence and persists the position
so a later run continues where this one stopped.
"""

import logging
from pinsequence import PinSequence, StateStore, format_pin

# Setup logging to see what's happening
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

def main():
    """Main example function."""
    store = StateStore("example_state.bin")

    print("pinsequence - Example Usage")
    print("=" * 50)

    sequence = PinSequence(store.load_or_initial())

    print("\nSingle PIN:")
    print(f"  {format_pin(sequence.next())}")

    print("\nBatch of five:")
    for pin in sequence.take(5):
        print(f"  {format_pin(pin)}")

    print("\nLazy stream, first three:")
    for _, pin in zip(range(3), sequence):
        print(f"  {format_pin(pin)}")

    store.save(sequence.state)
    print(f"\nSaved position: index={sequence.state.index}, salt={sequence.state.salt}")


if __name__ == "__main__":
    main()
