"""Command-line entry point, meant to be called from a Kakoune ``%sh{}`` block."""

from __future__ import annotations

import argparse
import sys
from typing import NoReturn, Optional, Sequence

from kaksel.commands import COMMANDS
from kaksel.config import Settings
from kaksel.host.kakoune import KakouneSource
from kaksel.host.source import SelectionSource, StatusMessage
from kaksel.runtime import telemetry
from kaksel.selection.errors import ChannelError, KakselError, UsageError


class ArgumentParser(argparse.ArgumentParser):
    """Raises ``UsageError`` instead of exiting, so the editor sees the error."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(
            f"Error parsing arguments: {message}", detail=self.format_usage().strip()
        )


def build_parser() -> argparse.ArgumentParser:
    parser = ArgumentParser(prog="kaksel", description="Selection algebra for Kakoune.")
    subparsers = parser.add_subparsers(dest="subcommand", metavar="COMMAND")
    subparsers.required = True
    for spec in COMMANDS.values():
        subparser = subparsers.add_parser(spec.name, help=spec.help)
        if spec.configure is not None:
            spec.configure(subparser)
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse ``argv`` after the subcommand's ``prepare`` hook has run."""

    tokens = list(sys.argv[1:] if argv is None else argv)
    spec = COMMANDS.get(tokens[0]) if tokens else None
    if spec is not None and spec.prepare is not None:
        tokens = [tokens[0], *spec.prepare(tokens[1:])]
    return build_parser().parse_args(tokens)


def run(args: argparse.Namespace, source: SelectionSource) -> StatusMessage:
    """Run the parsed subcommand against ``source`` and describe the outcome."""

    spec = COMMANDS[args.subcommand]
    options = spec.build_options(args)
    try:
        with telemetry.span(
            f"command::{spec.name}",
            component="commands",
            metadata={"command": spec.name},
        ) as span:
            message = spec.handler(source, options)
            span.done(message)
    except KakselError as exc:
        telemetry.record_event(
            "command_failed",
            level="error",
            data={
                "command": spec.name,
                "error": type(exc).__name__,
                "message": exc.message,
            },
        )
        return StatusMessage(exc.message, detail=exc.detail, failed=True)
    return StatusMessage(message)


def _report(source: SelectionSource, status: StatusMessage) -> None:
    try:
        source.display_message(status.message, status.detail)
    except ChannelError as exc:
        print(f"kaksel: {status.message}", file=sys.stderr)
        print(f"kaksel: {exc.message}", file=sys.stderr)


def _rejected(exc: KakselError) -> StatusMessage:
    telemetry.record_event(
        "arguments_rejected",
        level="error",
        data={"error": type(exc).__name__, "message": exc.message},
    )
    return StatusMessage(exc.message, detail=exc.detail, failed=True)


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    source: Optional[SelectionSource] = None,
) -> int:
    settings = Settings.from_env()
    if settings.log_preset:
        try:
            telemetry.configure(preset=settings.log_preset)
        except ValueError as exc:
            print(f"kaksel: {exc}", file=sys.stderr)

    args: Optional[argparse.Namespace] = None
    status: Optional[StatusMessage] = None
    try:
        args = parse_args(argv)
    except KakselError as exc:
        status = _rejected(exc)

    if source is None:
        try:
            source = KakouneSource.from_env(settings=settings)
        except KakselError as exc:
            if status is not None:
                print(f"kaksel: {status.message}", file=sys.stderr)
            print(f"kaksel: {exc.message}", file=sys.stderr)
            return 1

    if args is not None:
        status = run(args, source)
    assert status is not None
    _report(source, status)
    return 1 if status.failed else 0


__all__ = ["ArgumentParser", "build_parser", "parse_args", "run", "main"]


if __name__ == "__main__":  # pragma: no cover - manual entry
    sys.exit(main())
