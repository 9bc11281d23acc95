#!/usr/bin/env python3
"""
Command-line interface for pyjclass - decode and print a Java class file.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .classreader import ClassPath, decode_class
from .errors import ClassDecodeError
from .log import get_hexdump, logger
from .options import DecodeOptions, TEXT_ENCODINGS
from .printer import print_class


def load_class_bytes(args) -> Optional[bytes]:
    """Read the requested class from disk or the classpath, reporting failures."""
    if args.classpath is None:
        path = Path(args.file)
        if not path.is_file():
            print(f"Error: File not found: {args.file}", file=sys.stderr)
            return None
        try:
            return path.read_bytes()
        except OSError as e:
            print(f"Error reading {args.file}: {e}", file=sys.stderr)
            return None

    try:
        with ClassPath.from_string(args.classpath) as classpath:
            data = classpath.read_bytes(args.file)
    except (OSError, ValueError) as e:
        print(f"Error: Bad classpath: {e}", file=sys.stderr)
        return None
    if data is None:
        print(f"Error: Class not found: {args.file}", file=sys.stderr)
    return data


def decode_command(args) -> int:
    """Decode one class and print it."""
    data = load_class_bytes(args)
    if data is None:
        return 1

    options = DecodeOptions.from_params(
        text_encoding=args.text_encoding,
        single_slot_wide=args.single_slot_wide,
    )

    try:
        class_file = decode_class(data, options)
    except ClassDecodeError as e:
        print(f"Error: {e.kind} at offset {e.offset}: {e.args[0]}", file=sys.stderr)
        logger.debug(get_hexdump(data, e.offset))
        return 1

    print_class(class_file, sys.stdout, show_constants=args.constants)
    return 0


def main(argv=None):
    """Main entry point for pyjclass CLI."""
    parser = argparse.ArgumentParser(
        prog="pyjclass",
        description="Decode a Java class file and print its structure",
    )
    parser.add_argument(
        "file",
        help="Path to the .class file, or a class name when --classpath is given",
    )
    parser.add_argument(
        "-cp", "--classpath",
        help="Directories and jars to search for the class, separated by the platform path separator",
    )
    parser.add_argument(
        "-c", "--constants",
        action="store_true",
        help="List every constant pool entry",
    )
    parser.add_argument(
        "--text-encoding",
        choices=TEXT_ENCODINGS,
        default="mutf8",
        help="Encoding of Utf8 constants (default: mutf8)",
    )
    parser.add_argument(
        "--single-slot-wide",
        action="store_true",
        help="Count Long and Double constants as a single pool slot",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log each decoding stage to stderr",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    sys.exit(decode_command(args))


if __name__ == "__main__":
    main()
