"""Process runners — how a make invocation actually gets executed."""

from __future__ import annotations

import logging
import shlex
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

EXIT_BAD_CWD = 1
EXIT_NOT_EXECUTABLE = 126
EXIT_NOT_FOUND = 127


@dataclass(frozen=True)
class Invocation:
    """A single command to run: argument vector, working directory and environment."""

    argv: list[str]
    cwd: Path
    env: dict[str, str]

    def __str__(self) -> str:
        return shlex.join(self.argv)


@dataclass(frozen=True)
class ProcessResult:
    """Exit status and combined stdout/stderr of a finished process."""

    exit_status: int
    output: str


class Runner(ABC):
    """Executes an invocation and blocks until it finishes."""

    @abstractmethod
    def run(self, invocation: Invocation) -> ProcessResult: ...


class SubprocessRunner(Runner):
    """Run invocations as child processes, capturing all output."""

    def run(self, invocation: Invocation) -> ProcessResult:
        logger.debug("Running '%s' in %s", invocation, invocation.cwd)
        try:
            proc = subprocess.run(
                invocation.argv,
                cwd=invocation.cwd,
                env=invocation.env,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as exc:
            return self._failed_launch(invocation, exc)

        logger.debug("'%s' exited with status %d", invocation, proc.returncode)
        return ProcessResult(exit_status=proc.returncode, output=proc.stdout or "")

    def _failed_launch(self, invocation: Invocation, exc: OSError) -> ProcessResult:
        """Report a process that could not be started, using shell exit statuses."""
        if not invocation.cwd.is_dir():
            logger.error("Cannot run in '%s': not a directory", invocation.cwd)
            return ProcessResult(exit_status=EXIT_BAD_CWD, output=str(exc))

        logger.error("Cannot execute '%s': %s", invocation.argv[0], exc)
        if isinstance(exc, FileNotFoundError):
            return ProcessResult(exit_status=EXIT_NOT_FOUND, output=str(exc))
        return ProcessResult(exit_status=EXIT_NOT_EXECUTABLE, output=str(exc))
