"""Command line entry point for escroll."""

import argparse
import io
import json
import os
import sys
from pathlib import Path

from . import log
from .errors import FetchError, ScrollCancelled, ScrollError, ValidationError
from .models import DEFAULT_QUERY, SearchRequest
from .scroll import ScrollSession
from .settings import get_settings
from .transport import Transport

MAX_ERROR_BODY = 2000
EXIT_BROKEN_PIPE = 141  # 128 + SIGPIPE, what a shell reports for a killed writer


def read_body(file: Path | None, data: str | None) -> bytes:
    """Request body from a file, else from the literal argument (like curl -d)."""
    if file is not None:
        try:
            return file.read_bytes()
        except OSError as e:
            raise ValidationError(f"Can't read body file {file}: {e}") from e
    return (data or "").encode()


def write_document(doc, pretty: bool = False, stream=None) -> None:
    stream = stream or sys.stdout
    if pretty:
        stream.write(json.dumps(doc, indent=4, ensure_ascii=False))
    else:
        stream.write(json.dumps(doc, separators=(",", ":"), ensure_ascii=False))
    stream.write("\n")
    stream.flush()


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="escroll",
        description="Scroll through every hit of an Elasticsearch search and print the documents",
    )
    parser.add_argument(
        "-H",
        "--host",
        default=settings.host,
        help=f"Elasticsearch server and port (default: {settings.host})",
    )
    parser.add_argument(
        "-q",
        "--query",
        default=DEFAULT_QUERY,
        help=f"Index path and query string (default: {DEFAULT_QUERY})",
    )
    parser.add_argument(
        "-d",
        "--data",
        default=None,
        help="Search body given directly, same as curl -d",
    )
    parser.add_argument(
        "-f",
        "--file",
        type=Path,
        default=None,
        help="Path to the search body file (wins over --data)",
    )
    parser.add_argument(
        "-p",
        "--pretty",
        action="store_true",
        help="Indent each document instead of one per line",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=settings.timeout,
        help=f"Per-request timeout in seconds (default: {settings.timeout})",
    )
    parser.add_argument(
        "--empty-threshold",
        type=int,
        default=settings.empty_threshold,
        help=(
            "A page with this many hits or fewer ends the scroll and is not printed "
            f"(default: {settings.empty_threshold})"
        ),
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Plain log output",
    )
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    log.set_color(get_settings().color and not args.no_color)

    try:
        request = SearchRequest(
            host=args.host,
            query=args.query,
            body=read_body(args.file, args.data),
        )
        with Transport(request.host, timeout=args.timeout) as transport:
            session = ScrollSession(
                request,
                transport,
                empty_threshold=args.empty_threshold,
            )
            try:
                session.run(lambda doc: write_document(doc, pretty=args.pretty))
            except KeyboardInterrupt as e:
                raise ScrollCancelled("Interrupted") from e
    except ScrollError as e:
        log.log(log.ERROR, e.message)
        if isinstance(e, FetchError) and e.body:
            log.log(log.ERROR, e.body[:MAX_ERROR_BODY])
        sys.exit(e.exit_code)
    except BrokenPipeError:
        # The reader went away (e.g. `escroll ... | head`). Point stdout at
        # devnull so the interpreter's final flush doesn't raise again.
        devnull = os.open(os.devnull, os.O_WRONLY)
        try:
            os.dup2(devnull, sys.stdout.fileno())
        except io.UnsupportedOperation:
            pass  # stdout is not a real file, nothing left to flush
        sys.exit(EXIT_BROKEN_PIPE)


if __name__ == "__main__":
    main()
