from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Mapping, Protocol, Sequence

from ..errors import CommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    output: str


def _fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
) -> CmdResult:
    """Run a command with consistent logging.

    - Always logs the command.
    - stderr is folded into stdout so the caller gets one combined output.
    - With check=True a non-zero exit raises CommandError carrying that output.
    """

    argv_list = list(argv)
    logger.info("CMD %s", _fmt_argv(argv_list))

    p = subprocess.run(
        argv_list,
        text=True,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        cwd=cwd,
        env=dict(os.environ, **(env or {})),
    )

    if p.stdout:
        logger.debug("OUTPUT %s", p.stdout.strip())

    if check and p.returncode != 0:
        raise CommandError(
            f"Command failed ({p.returncode}): {_fmt_argv(argv_list)}",
            argv=argv_list,
            returncode=p.returncode,
            output=p.stdout or "",
        )

    return CmdResult(argv=argv_list, returncode=p.returncode, output=p.stdout or "")


class Command(Protocol):
    """Capability used by the pipeline to run apt-key, apt-get and dpkg."""

    def output(self, cwd: str, program: str, *args: str) -> str:
        ...


class SubprocessCommand:
    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self.env = dict(env or {})

    def output(self, cwd: str, program: str, *args: str) -> str:
        return run_cmd([program, *args], cwd=cwd, env=self.env).output
