"""Main CLI entry point for cloakid."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .. import __version__
from ..codec.typed import create_codec
from ..exceptions import CloakIdError, NonCanonicalInputError
from ..kinds import NumericKind
from ..options import CloakIdConfig
from .analyze import analyze_file

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NON_CANONICAL = 2


def main() -> int:
    """Main entry point for the cloakid CLI.

    Returns:
        Exit code (0 for success, 1 for error, 2 for non-canonical input)
    """
    parser = argparse.ArgumentParser(
        description="cloakid: Reversible Identifier Obfuscation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cloakid --encode 123456 --kind int32 --min-length 6
  cloakid --decode ID --kind int32 --min-length 6     Decode an ID printed by --encode
  cloakid --analyze models.py            List cloaked fields of pydantic models
  cloakid --version                      Show version

Defaults are read from CLOAKID_MIN_LENGTH and CLOAKID_ALPHABET.
        """,
    )

    action = parser.add_mutually_exclusive_group()
    action.add_argument("--encode", metavar="VALUE", type=int, help="Encode an integer")
    action.add_argument("--decode", metavar="TEXT", type=str, help="Decode an encoded ID")
    action.add_argument(
        "--analyze",
        metavar="FILE",
        type=str,
        help="Analyze pydantic models and list their cloaked fields",
    )

    parser.add_argument(
        "--kind",
        default="int32",
        help="Integer kind: int16, uint16, int32, uint32, int64, uint64 (default: int32)",
    )
    parser.add_argument("--min-length", type=int, default=None, help="Minimum encoded length")
    parser.add_argument("--alphabet", type=str, default=None, help="Custom alphabet")

    parser.add_argument(
        "--version",
        action="version",
        version=f"cloakid {__version__}",
    )

    args = parser.parse_args()

    try:
        config = CloakIdConfig.from_env()
        options = config.codec_options().merged(
            min_length=args.min_length, alphabet=args.alphabet
        )
    except CloakIdError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    # Handle --analyze
    if args.analyze:
        file_path = Path(args.analyze)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return EXIT_ERROR

        try:
            analyze_file(file_path, options)
            return EXIT_OK
        except Exception as e:
            print(f"Error analyzing file: {e}", file=sys.stderr)
            return EXIT_ERROR

    if args.encode is not None or args.decode is not None:
        try:
            kind = NumericKind.parse(args.kind)
            codec = create_codec(options)
            if args.encode is not None:
                print(codec.encode(args.encode, kind))
            else:
                print(codec.decode(args.decode, kind))
            return EXIT_OK
        except NonCanonicalInputError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_NON_CANONICAL
        except CloakIdError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_ERROR

    # If no command specified, show help
    parser.print_help()
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
