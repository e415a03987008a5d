import argparse
import json
import sys
from pathlib import Path

from requestbook import http_client
from requestbook.config import get_settings
from requestbook.errors import CollectionFileError
from requestbook.files import read_collection_file
from requestbook.logger import setup_logging
from requestbook.serializer import serialize_collection


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="requestbook")
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    parser.add_argument("--log-level", default=None, help="Logging level (default from REQUESTBOOK_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command")

    inspect_parser = subparsers.add_parser("inspect", help="List the requests in a .http file")
    inspect_parser.add_argument("path", help="Collection file")

    format_parser = subparsers.add_parser("format", help="Re-export a .http file in canonical layout")
    format_parser.add_argument("path", help="Collection file")
    format_parser.add_argument("-o", "--output", help="Write to this file instead of stdout")

    send_parser = subparsers.add_parser("send", help="Send one request from a .http file")
    send_parser.add_argument("path", help="Collection file")
    send_parser.add_argument("name", help="Request name")
    send_parser.add_argument("--timeout", type=float, default=None, help="Timeout in seconds")
    return parser


def _inspect(args) -> int:
    report = read_collection_file(args.path)
    collection = report.collection
    print(f"{collection.name}: {len(collection.requests)} request(s)")
    for request in collection.requests:
        print(f"  {request.method:<6} {request.url}  {request.name}")
    for item in report.skipped:
        print(
            f"  skipped request {item.request_index} line {item.line_number}: {item.reason}: {item.text!r}",
            file=sys.stderr,
        )
    return 0


def _format(args) -> int:
    report = read_collection_file(args.path)
    text = serialize_collection(report.collection)
    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)
    return 0


def _send(args) -> int:
    report = read_collection_file(args.path)
    request = report.collection.find_request(args.name)
    if request is None:
        print(f"no request named {args.name!r} in {args.path}", file=sys.stderr)
        return 1
    result = http_client.send_request(request, timeout=args.timeout)
    print(json.dumps(result, indent=2, ensure_ascii=False, default=str))
    return 0 if result.get("success") else 1


COMMANDS = {
    "inspect": _inspect,
    "format": _format,
    "send": _send,
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.version:
        from . import __version__

        print(__version__)
        return 0
    setup_logging(args.log_level or get_settings().log_level)
    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 0
    try:
        return handler(args)
    except CollectionFileError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
