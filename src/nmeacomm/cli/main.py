"""Main CLI entry point for nmeacomm."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ..cli.analyze import analyze_file
from ..codec.decoder import SentenceDecoder
from ..framing import frame_sentence


def check_sentence(sentence: str) -> bool:
    """Print the parsed contents of a sentence.

    Args:
        sentence: Sentence text; a missing CRLF terminator is tolerated

    Returns:
        True if the sentence parsed with a valid checksum
    """
    decoder = SentenceDecoder(sentence)
    if decoder.field_count == 0:
        print("Not an NMEA sentence (missing '$')")
        return False

    print(f"Talker:       {decoder.talker or '(invalid)'}")
    print(f"Message code: {decoder.message_code or '(invalid)'}")
    print(f"Fields:       {decoder.field_count - 1}")
    for i, field in enumerate(decoder.fields[1:], 1):
        print(f"  {i:>2}. {field!r}")

    if not decoder.checksum_present:
        print("Checksum:     missing")
    elif decoder.checksum_valid:
        print(f"Checksum:     {decoder.checksum:02X} (valid)")
    else:
        print(f"Checksum:     {decoder.checksum:02X} (INVALID)")

    return decoder.talker is not None and decoder.checksum_valid


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the nmeacomm CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="nmeacomm: NMEA 0183 Sentence Codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  nmeacomm --check '$GPGGA,42,123.456,STRING*40'   Parse and verify a sentence
  nmeacomm --checksum 'GPGGA,42,123.456,STRING'     Frame a sentence body
  nmeacomm --analyze messages.py                    Show message field layouts
  nmeacomm --version                                Show version
        """,
    )

    parser.add_argument(
        "--check",
        metavar="SENTENCE",
        type=str,
        help="Parse a sentence and verify its checksum",
    )

    parser.add_argument(
        "--checksum",
        metavar="BODY",
        type=str,
        help="Add '$', checksum and CRLF to a sentence body",
    )

    parser.add_argument(
        "--analyze",
        metavar="FILE",
        type=str,
        help="Analyze message classes and show their field layout",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="nmeacomm 0.1.0",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.check:
        return 0 if check_sentence(args.check) else 1

    if args.checksum:
        try:
            sentence = frame_sentence(args.checksum)
        except (ValueError, UnicodeEncodeError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(sentence.decode("ascii").rstrip("\r\n"))
        return 0

    # Handle --analyze
    if args.analyze:
        file_path = Path(args.analyze)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            analyze_file(file_path)
            return 0
        except Exception as e:
            print(f"Error analyzing file: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
