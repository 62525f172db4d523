"""Selection source backed by a running Kakoune session.

Commands are written to ``$kak_command_fifo``; values are requested with
``echo -quoting shell -to-file $kak_response_fifo`` and read back from the
response fifo, then split with POSIX shell rules. Scoped reads run inside
``evaluate-commands -draft`` so the live selections are left untouched.
"""

from __future__ import annotations

import shlex
from typing import List, Optional, Sequence

from kaksel.config import KakouneEnvironment, Settings
from kaksel.runtime import telemetry
from kaksel.selection.errors import (
    ChannelError,
    EmptySelectionsError,
    ParseError,
    UsageError,
)
from kaksel.selection.position import SelectionDesc
from kaksel.selection.registers import Register

from .source import Scope


def escape(text: str) -> str:
    """Quote-safe body for a single-quoted Kakoune string."""

    return text.replace("'", "''")


def quote(text: str) -> str:
    return f"'{escape(text)}'"


class KakouneSource:
    """Talks to Kakoune through the fifos it exported to ``%sh{}``."""

    def __init__(
        self,
        environment: KakouneEnvironment,
        *,
        settings: Optional[Settings] = None,
    ) -> None:
        self.environment = environment
        self.settings = settings or Settings()
        self.logger = telemetry.get_logger("kaksel.host.kakoune")

    @classmethod
    def from_env(cls, *, settings: Optional[Settings] = None) -> "KakouneSource":
        return cls(KakouneEnvironment.from_env(), settings=settings)

    def command(self, command: str) -> None:
        """Send one command (or a ``;``-separated batch) to Kakoune."""

        self.logger.debug(f"kak command: {command}")
        try:
            with open(
                self.environment.command_fifo, "a", encoding="utf-8"
            ) as fifo:
                fifo.write(f"{command};")
        except OSError as exc:
            raise ChannelError("Error writing to fifo", detail=repr(exc)) from exc

    def response(self, expansion: str, keys: str = "") -> List[str]:
        """Evaluate ``expansion`` (after ``keys`` in a draft) and split it.

        When ``keys`` fail, Kakoune still writes an empty response so the
        fifo read returns.
        """

        fifo = self.environment.response_fifo
        echo = f"echo -quoting shell -to-file {fifo} -- {expansion}"
        with telemetry.span(
            "kak::response",
            component="host",
            metadata={"expansion": expansion, "keys": keys},
        ) as span:
            if keys:
                self.command(
                    "evaluate-commands -draft %{\n"
                    "    try %{\n"
                    f"        execute-keys {quote(keys)};\n"
                    f"        {echo};\n"
                    "    } catch %{\n"
                    f"        echo -to-file {fifo} -- ;\n"
                    "    }\n"
                    "}"
                )
            else:
                self.command(echo)

            try:
                with open(fifo, "r", encoding="utf-8") as handle:
                    raw = handle.read()
            except OSError as exc:
                raise ChannelError("Error reading from fifo", detail=repr(exc)) from exc

            try:
                values = shlex.split(raw)
            except ValueError as exc:
                raise ParseError("Corrupt kak response", detail=str(exc)) from exc
            span.add_metadata("values", len(values))
        return values

    def get_selections(self, scope: Scope = Scope.CURRENT) -> List[str]:
        return self.response("%val{selections}", scope.value)

    def get_selection_descs(self, scope: Scope = Scope.CURRENT) -> List[SelectionDesc]:
        return [
            SelectionDesc.parse(item)
            for item in self.response("%val{selections_desc}", scope.value)
        ]

    def set_selections(self, selections: Sequence[str]) -> None:
        if not selections:
            raise EmptySelectionsError()
        values = " ".join(quote(item) for item in selections)
        self.command(f"set-register '\"' {values}; execute-keys R")

    def set_selection_descs(self, descs: Sequence[SelectionDesc]) -> None:
        if not descs:
            raise EmptySelectionsError()
        self.command("select " + " ".join(str(desc) for desc in descs))

    def get_register(self, register: Register) -> List[str]:
        # restore the marks saved in the register, then read their content
        values = self.response("%val{selections}", f'"{register.char}z')
        if not values:
            raise UsageError(f"Register {register} has no content")
        return values

    def get_register_values(self, register: Register) -> List[str]:
        return self.response(f"%reg{{{register.expanded}}}")

    def write_scratch(self, text: str) -> None:
        self.command(
            "evaluate-commands -save-regs '\"' %{\n"
            f"    set-register '\"' {quote(text)};\n"
            f"    edit -scratch {quote(self.settings.scratch_buffer)};\n"
            "    execute-keys '%<a-R>';\n"
            "}"
        )

    def display_message(self, message: str, detail: Optional[str] = None) -> None:
        lines = [f"echo {quote(message)}", f"echo -debug {quote(message)}"]
        if detail:
            lines.append(f"echo -debug {quote(detail)}")
        self.command("; ".join(lines))


__all__ = ["KakouneSource", "escape", "quote"]
