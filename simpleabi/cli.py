#!/usr/bin/env python3
"""
SimpleABI command line tool.

Generates C encoder/dispatcher templates for non-Solidity Qtum contracts from
a .abi interface file.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from simpleabi.core.config import ABI_EXTENSION, HTTP_TIMEOUT_ENV, SUPPORTED_LANGUAGES
from simpleabi.core.errors import SimpleABIError, UsageError
from simpleabi.core.pipeline import generate
from simpleabi.utils.fetch import is_remote
from simpleabi.utils.files import save_artifacts


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="simpleabi",
        description="Generate C encoding/decoding templates from a SimpleABI interface file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Caller-side encoder only
    simpleabi -a examples/AirDropToken.abi -e

    # Encoder and dispatcher into ./build
    simpleabi -a examples/AirDropToken.abi -e -d -o build
        """
    )

    parser.add_argument("-a", "--abi", required=True,
                        help="path of simpleabi file; must be in .abi extension")
    parser.add_argument("-e", "--encode", action="store_true",
                        help="generate the encoding (caller-side) template")
    parser.add_argument("-d", "--decode", action="store_true",
                        help="generate the decoding (dispatcher) template")
    parser.add_argument("-l", "--lang", default="c",
                        help=f"language to generate, one of: {', '.join(SUPPORTED_LANGUAGES)}")
    parser.add_argument("-o", "--output-dir", default=".",
                        help="directory to write generated files to (default: current directory)")
    parser.add_argument("--timeout", type=float, default=None,
                        help=f"seconds to wait for remote interfaces (or set {HTTP_TIMEOUT_ENV})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    return parser


def check_arguments(args: argparse.Namespace) -> None:
    """
    Raises:
        UsageError: On any invalid combination of arguments
    """
    if not args.encode and not args.decode:
        raise UsageError("Must select one of encode or decode (or both) as an option to use this tool")

    if args.lang not in SUPPORTED_LANGUAGES:
        raise UsageError(
            f"Unexpected language {args.lang} selected, select one of: {', '.join(SUPPORTED_LANGUAGES)}"
        )

    if is_remote(args.abi):
        return

    if not Path(args.abi).is_file():
        raise UsageError(f"Please include a valid path to a valid {ABI_EXTENSION} file")

    extension = Path(args.abi).suffix
    if extension != ABI_EXTENSION:
        raise UsageError(f"Expected file extension {ABI_EXTENSION}, got {extension or 'none'}")


def resolve_timeout(args: argparse.Namespace) -> Optional[float]:
    if args.timeout is not None:
        return args.timeout
    value = os.environ.get(HTTP_TIMEOUT_ENV)
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        raise UsageError(f"{HTTP_TIMEOUT_ENV} must be a number of seconds, got {value!r}") from None


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        check_arguments(args)
        result = generate(
            args.abi,
            encode=args.encode,
            decode=args.decode,
            timeout=resolve_timeout(args)
        )
        paths = save_artifacts(result["artifacts"], args.output_dir)
    except UsageError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except SimpleABIError as e:
        print(f"Error in generating from your abi file: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error in file creation and writing: {e}", file=sys.stderr)
        return 1

    interface = result["interface"]
    print(f"Contract {interface.name}: {len(interface.functions)} functions")
    for path in paths:
        print(f"  {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
