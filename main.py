#!/usr/bin/env python3
"""
Air Gestures - Main Entry Point
Lists, deletes and interactively records or recognizes air patterns.
"""

import argparse
import json
import logging
import sys

from air_gestures.config.settings import GestureConfig
from air_gestures.gestures.recognizer import PatternRecognizer
from air_gestures.storage.pattern_store import PatternStore
from air_gestures.utils.gesture_utils import DataValidator, ShiftUtils


def load_shifts(path):
    """Read a gesture saved as a JSON list of {"dx": .., "dy": ..} deltas."""
    with open(path, 'r') as f:
        deltas = json.load(f)
    if not DataValidator.validate_shift_data(deltas):
        raise ValueError(f"{path} is not a list of dx/dy deltas")
    return ShiftUtils.from_dicts(deltas)


def main(argv=None):
    """Main entry point for air gestures."""
    parser = argparse.ArgumentParser(description="Air gesture pattern recognition")
    parser.add_argument("--store", default=GestureConfig.PATTERN_STORE_FILE,
                        help="pattern store file")
    parser.add_argument("--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("list", help="list stored patterns")
    delete = sub.add_parser("delete", help="delete a stored pattern")
    delete.add_argument("name")
    record = sub.add_parser("record", help="store a gesture read from a deltas file")
    record.add_argument("name")
    record.add_argument("deltas", help="JSON file of dx/dy deltas")
    recognize = sub.add_parser("recognize", help="recognize a gesture read from a deltas file")
    recognize.add_argument("deltas", help="JSON file of dx/dy deltas")
    sub.add_parser("demo", help="open the capture window (default)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.command == "list":
        store = PatternStore(args.store)
        for name, pattern in store.get_all_patterns():
            print(f"{name}: {pattern!r}")
        return 0

    if args.command == "delete":
        store = PatternStore(args.store)
        if store.delete_pattern(args.name):
            print(f"Deleted '{args.name}'")
            return 0
        print(f"Pattern '{args.name}' not found")
        return 1

    if args.command in ("record", "recognize"):
        recognizer = PatternRecognizer(store=PatternStore(args.store))
        try:
            shifts = load_shifts(args.deltas)
            if args.command == "record":
                pattern = recognizer.record(args.name, shifts)
                print(f"Pattern '{args.name}' saved: {pattern!r}")
                return 0
        except (OSError, ValueError) as e:
            print(f"Error: {e}")
            return 1

        result = recognizer.recognize(shifts)
        for name, similarity in result.all_similarities:
            print(f"  {name}: {similarity:.3f}")
        if result.is_recognized:
            print(f"Recognized: {result.recognized_name} ({result.similarity_score:.2f})")
            return 0
        print("Unknown pattern")
        return 1

    # Imported here so the file commands work without a display
    from demo_air_patterns import AirPatternDemo

    demo = AirPatternDemo(args.store)
    try:
        demo.run()
    except KeyboardInterrupt:
        print("\nStopping...")
    finally:
        demo.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
