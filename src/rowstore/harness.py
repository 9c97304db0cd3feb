"""Drive the REPL as a subprocess and capture its transcript."""

from __future__ import annotations

import subprocess
import sys
from dataclasses import dataclass, field
from typing import Iterable

from rowstore.log import get_logger
from rowstore.row import ENCODING, ENCODING_ERRORS

DEFAULT_COMMAND = [sys.executable, "-m", "rowstore.repl"]

logger = get_logger(__name__)


@dataclass
class ScriptResult:
    """Output lines and exit status of one scripted session."""

    lines: list[str] = field(default_factory=list)
    returncode: int | None = None

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def split_lines(output: str) -> list[str]:
    """Split output into lines the way a line scanner does.

    A trailing newline does not produce an empty final line, but an
    unterminated final fragment (such as a bare prompt) is kept.
    """
    lines = output.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def run_script(
    commands: Iterable[str],
    argv: list[str] | None = None,
    timeout: float = 10.0,
) -> ScriptResult:
    """Pipe commands to a fresh engine process and collect its output.

    The input is written while the output is drained, so a long script cannot
    fill the pipes and deadlock. Standard input is closed once every command
    has been written, which ends a session that has no ``.exit``.

    Args:
        commands: Input lines, without trailing newlines.
        argv: Command line of the engine; defaults to ``python -m rowstore.repl``.
        timeout: Seconds allowed for the whole exchange.

    Raises:
        subprocess.TimeoutExpired: If the engine has not exited in time. The
            engine is killed first.
    """
    script = "".join(command + "\n" for command in commands)
    proc = subprocess.Popen(
        argv or DEFAULT_COMMAND,
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        text=True,
        encoding=ENCODING,
        errors=ENCODING_ERRORS,
    )
    logger.debug("engine_started", pid=proc.pid)

    try:
        output, _ = proc.communicate(script, timeout=timeout)
    except subprocess.TimeoutExpired:
        logger.warning("engine_timed_out", pid=proc.pid, timeout=timeout)
        proc.kill()
        proc.communicate()
        raise

    logger.debug("engine_exited", pid=proc.pid, returncode=proc.returncode)
    return ScriptResult(lines=split_lines(output), returncode=proc.returncode)

