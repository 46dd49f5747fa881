"""Command-line interface for the message store.

This module provides a CLI for reading and writing Message DB streams:
reading a window of a stream or category, reading the last message of a
stream, and appending a message with an optional expected version.
"""

import argparse
import json
import sys
from typing import Any

from messagedb_store.config import Config, load_config
from messagedb_store.logging import configure_logging
from messagedb_store.store import (
    ReadMessage,
    Session,
    VersionConflict,
    WriteMessage,
    get,
    get_last,
    put,
)
from messagedb_store.store import expected_version as ev

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_VERSION_CONFLICT = 2


def _message_to_dict(message: ReadMessage) -> dict[str, Any]:
    return {
        "id": message.id,
        "stream_name": message.stream_name,
        "type": message.type,
        "position": message.position,
        "global_position": message.global_position,
        "time": message.time.isoformat(),
        "data": message.data,
        "metadata": message.metadata,
    }


def _print_messages(messages: list[ReadMessage], output_format: str) -> None:
    if output_format == "json":
        print(json.dumps([_message_to_dict(m) for m in messages], indent=2))
        return

    for message in messages:
        print(f"[{message.position}] {message.type}")
        print(f"  Stream: {message.stream_name}")
        print(f"  ID: {message.id}")
        print(f"  Time: {message.time.isoformat()}")
        print(f"  Global Position: {message.global_position}")
        print(f"  Data: {json.dumps(message.data)}")
        if message.metadata:
            print(f"  Metadata: {json.dumps(message.metadata)}")


def _parse_json_object(value: str) -> dict[str, Any]:
    """argparse type for JSON object arguments."""
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"invalid JSON: {e}") from e
    if not isinstance(parsed, dict):
        raise argparse.ArgumentTypeError("expected a JSON object")
    return parsed


def _parse_expected_version(value: str) -> ev.ExpectedVersion:
    """argparse type for --expected-version ("no_stream" or an integer)."""
    try:
        return ev.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(
            f"expected 'no_stream' or an integer, got {value!r}"
        ) from e


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        Configured argument parser with all subcommands
    """
    parser = argparse.ArgumentParser(
        prog="messagedb-store",
        description="Read and write Message DB streams",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration file (.env format)",
        metavar="FILE",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    get_parser = subparsers.add_parser(
        "get", help="Read messages from a stream, or from a category when no id is given"
    )
    get_parser.add_argument("stream_name", type=str, help="Stream or category name")
    get_parser.add_argument(
        "--position", type=int, help="Starting position (default from config)", metavar="N"
    )
    get_parser.add_argument(
        "--batch-size", type=int, help="Maximum messages to read (default from config)", metavar="N"
    )
    get_parser.add_argument("--condition", type=str, help="SQL condition", metavar="SQL")

    last_parser = subparsers.add_parser("get-last", help="Read the last message of a stream")
    last_parser.add_argument("stream_name", type=str, help="Stream name")

    put_parser = subparsers.add_parser("put", help="Append a message to a stream")
    put_parser.add_argument("stream_name", type=str, help="Stream name")
    put_parser.add_argument("type", type=str, help="Message type")
    put_parser.add_argument(
        "--data", type=_parse_json_object, default={}, help="Message data (JSON object)"
    )
    put_parser.add_argument(
        "--metadata", type=_parse_json_object, default=None, help="Message metadata (JSON object)"
    )
    put_parser.add_argument(
        "--expected-version",
        type=_parse_expected_version,
        default=None,
        help="Expected stream version: an integer or 'no_stream'",
    )
    put_parser.add_argument("--id", type=str, default=None, help="Message id (default: random)")

    return parser


def cmd_get(args: argparse.Namespace, config: Config, session: Session) -> int:
    """Handle the 'get' command."""
    position = config.store.position if args.position is None else args.position
    batch_size = config.store.batch_size if args.batch_size is None else args.batch_size

    messages = get(
        session,
        args.stream_name,
        position=position,
        batch_size=batch_size,
        condition=args.condition,
    )
    _print_messages(messages, args.format)
    return EXIT_OK


def cmd_get_last(args: argparse.Namespace, config: Config, session: Session) -> int:
    """Handle the 'get-last' command. Exits with 1 if the stream is empty."""
    message = get_last(session, args.stream_name)
    if message is None:
        print(f"No messages found in stream: {args.stream_name}", file=sys.stderr)
        return EXIT_ERROR

    _print_messages([message], args.format)
    return EXIT_OK


def cmd_put(args: argparse.Namespace, config: Config, session: Session) -> int:
    """Handle the 'put' command. Exits with 2 on a version conflict."""
    message = WriteMessage(type=args.type, data=args.data, metadata=args.metadata, id=args.id)

    try:
        position = put(
            session,
            message,
            args.stream_name,
            expected_version=args.expected_version,
        )
    except VersionConflict as e:
        print(f"Version conflict: {e.message}", file=sys.stderr)
        return EXIT_VERSION_CONFLICT

    if args.format == "json":
        print(json.dumps({"stream_name": args.stream_name, "position": position}))
    else:
        print(f"Written to {args.stream_name} at position {position}")
    return EXIT_OK


COMMANDS = {
    "get": cmd_get,
    "get-last": cmd_get_last,
    "put": cmd_put,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (default: sys.argv[1:])

    Returns:
        Exit code (0 for success, 2 for a version conflict, 1 for other errors)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_ERROR

    configure_logging(config.logging)

    handler = COMMANDS[args.command]
    try:
        with Session(config.message_db) as session:
            return handler(args, config, session)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
