"""Environment-driven settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from kaksel.selection.errors import EnvironmentVariableError

ENV_PREFIX = "KAKSEL_"
DEFAULT_SCRATCH_BUFFER = "*kaksel-set*"
DEFAULT_PIPE_COMMAND = "cat"


def _require(environ: Mapping[str, str], name: str) -> str:
    value = environ.get(name)
    if not value:
        raise EnvironmentVariableError(f"Env var {name} is not defined")
    return value


@dataclass(frozen=True, slots=True)
class KakouneEnvironment:
    """Variables Kakoune exports to a ``%sh{}`` block that mentions them."""

    command_fifo: str
    response_fifo: str
    session: Optional[str] = None
    client: Optional[str] = None

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "KakouneEnvironment":
        env = os.environ if environ is None else environ
        return cls(
            command_fifo=_require(env, "kak_command_fifo"),
            response_fifo=_require(env, "kak_response_fifo"),
            session=env.get("kak_session") or None,
            client=env.get("kak_client") or None,
        )


@dataclass(frozen=True, slots=True)
class Settings:
    scratch_buffer: str = DEFAULT_SCRATCH_BUFFER
    log_preset: Optional[str] = None
    pipe_command: str = DEFAULT_PIPE_COMMAND

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            scratch_buffer=env.get(f"{ENV_PREFIX}SCRATCH_BUFFER")
            or DEFAULT_SCRATCH_BUFFER,
            log_preset=env.get(f"{ENV_PREFIX}LOG_PRESET") or None,
            pipe_command=env.get(f"{ENV_PREFIX}PIPE_COMMAND") or DEFAULT_PIPE_COMMAND,
        )


__all__ = [
    "KakouneEnvironment",
    "Settings",
    "DEFAULT_PIPE_COMMAND",
    "DEFAULT_SCRATCH_BUFFER",
]
