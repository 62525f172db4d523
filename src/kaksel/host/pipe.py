"""Pipe selections through an external process.

Records travel as null-delimited UTF-8 in both directions because selection
content may itself contain newlines. A background thread feeds the child's
stdin while the calling thread drains its stdout, so neither side can block
on a full pipe buffer.
"""

from __future__ import annotations

import subprocess
import tempfile
import threading
from typing import List, Optional, Sequence

from kaksel.runtime import telemetry
from kaksel.selection.errors import ChannelError

RECORD_SEPARATOR = b"\0"

logger = telemetry.get_logger("kaksel.host.pipe")


def encode_records(records: Sequence[str]) -> bytes:
    return b"".join(record.encode("utf-8") + RECORD_SEPARATOR for record in records)


def decode_records(payload: bytes) -> List[str]:
    """Split on null bytes; a trailing separator does not start a record."""

    if not payload:
        return []
    items = payload.split(RECORD_SEPARATOR)
    if items[-1] == b"":
        items.pop()
    return [item.decode("utf-8", errors="replace") for item in items]


def run_external(
    command: str, args: Sequence[str], records: Sequence[str]
) -> List[str]:
    """Run ``command`` with ``records`` on stdin and return its output records."""

    argv = [command, *args]
    with telemetry.span(
        "pipe::run_external",
        component="host",
        metadata={"command": command, "records": len(records)},
    ) as span, tempfile.TemporaryFile() as stderr_file:
        try:
            proc = subprocess.Popen(
                argv,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=stderr_file,
            )
        except OSError as exc:
            raise ChannelError(
                f"Failed to run {command}", detail=repr(exc)
            ) from exc

        feed_errors: List[BaseException] = []

        def _feed() -> None:
            assert proc.stdin is not None
            try:
                proc.stdin.write(encode_records(records))
            except OSError as exc:
                feed_errors.append(exc)
            finally:
                try:
                    proc.stdin.close()
                except OSError as exc:
                    feed_errors.append(exc)

        worker = threading.Thread(target=_feed, name="kaksel-pipe-feed", daemon=True)
        worker.start()

        assert proc.stdout is not None
        payload = proc.stdout.read()
        proc.stdout.close()
        worker.join()
        returncode = proc.wait()

        stderr_file.seek(0)
        stderr_text: Optional[str] = (
            stderr_file.read().decode("utf-8", errors="replace").strip() or None
        )

        if feed_errors:
            raise ChannelError(
                f"Failed to write to {command}", detail=repr(feed_errors[0])
            )
        if returncode != 0:
            raise ChannelError(
                f"{command} exited with status {returncode}", detail=stderr_text
            )

        outputs = decode_records(payload)
        span.add_metadata("outputs", len(outputs))
        logger.debug(f"pipe {command}: {len(records)} in, {len(outputs)} out")
        return outputs


__all__ = ["RECORD_SEPARATOR", "encode_records", "decode_records", "run_external"]
