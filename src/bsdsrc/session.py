"""Build session — run make targets against a FreeBSD source tree."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from . import hcl
from .config import SourceConfig
from .errors import BuildError, ErrorCode
from .runner import Invocation, Runner, SubprocessRunner
from .targets import Target, lookup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildResult:
    """Outcome of a single build operation; truthy on success."""

    target: str
    ok: bool
    output: str = ""
    exit_status: int | None = None
    error: ErrorCode | None = None

    def __bool__(self) -> bool:
        return self.ok

    def raise_for_error(self) -> None:
        """Raise BuildError if this result is a failure."""
        if self.error is not None:
            raise BuildError(self.error, exit_status=self.exit_status, output=self.output)


class BuildSession:
    """Holds the source configuration and the results of the last operation.

    A session whose source directory is missing at construction time is
    permanently failed: every operation reports ErrorCode.SOURCE_MISSING
    without running anything.
    """

    def __init__(
        self,
        config: SourceConfig | None = None,
        *,
        runner: Runner | None = None,
        dry_run: bool = False,
        **options: Any,
    ) -> None:
        if config is None:
            config = SourceConfig(**options)
        elif options:
            config = SourceConfig(**{**config.model_dump(), **options})

        self.config = config
        self.runner = runner if runner is not None else SubprocessRunner()
        self.dry_run = dry_run

        self.last_error: ErrorCode | None = None
        self.last_exit_status: int | None = None
        self.last_output: str | None = None
        self.last_result: BuildResult | None = None
        self.permanent_error: ErrorCode | None = None

        if not config.source_exists():
            logger.warning("The source directory, %s, does not exist", config.src_dir)
            self.permanent_error = ErrorCode.SOURCE_MISSING

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        name: str | None = None,
        *,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> BuildSession:
        """Create a session from a `source` block in an HCL file."""
        config = hcl.load_config(Path(path), name, context=context)
        return cls(config, **kwargs)

    @property
    def src_dir(self) -> Path:
        return self.config.src_dir

    @property
    def obj_dir(self) -> Path:
        return self.config.obj_dir

    @property
    def kernel(self) -> str:
        return self.config.kernel

    @property
    def make_conf(self) -> Path:
        return self.config.make_conf

    def invocation(self, tgt: Target) -> Invocation:
        """Build the invocation for a target without running it."""
        env = {**os.environ, **self.config.environ()}
        return Invocation(argv=tgt.argv(self.config), cwd=self.config.src_dir, env=env)

    def run(self, target_name: str) -> BuildResult:
        """Run a registered make target and record its outcome."""
        tgt = lookup(target_name)

        if self.permanent_error is not None:
            logger.debug("Not running '%s'; session is permanently failed", target_name)
            self.last_error = self.permanent_error
            self.last_result = BuildResult(target=target_name, ok=False, error=self.permanent_error)
            return self.last_result

        self.last_error = None
        self.last_exit_status = None

        invocation = self.invocation(tgt)
        if self.dry_run:
            logger.info("[DRY RUN] Would run '%s' in %s", invocation, invocation.cwd)
            self.last_output = ""
            self.last_result = BuildResult(target=target_name, ok=True)
            return self.last_result

        logger.info("Running '%s' in %s", invocation, invocation.cwd)
        proc = self.runner.run(invocation)
        self.last_output = proc.output
        self.last_exit_status = proc.exit_status

        if proc.exit_status != 0:
            logger.debug("'%s' failed with exit status %d", target_name, proc.exit_status)
            self.last_error = tgt.error_code
            self.last_result = BuildResult(
                target=target_name,
                ok=False,
                output=proc.output,
                exit_status=proc.exit_status,
                error=tgt.error_code,
            )
        else:
            self.last_result = BuildResult(
                target=target_name,
                ok=True,
                output=proc.output,
                exit_status=proc.exit_status,
            )
        return self.last_result

    def build_world(self) -> BuildResult:
        """Build the world."""
        return self.run("buildworld")

    def install_world(self) -> BuildResult:
        """Install the world."""
        return self.run("installworld")

    def build_kernel(self) -> BuildResult:
        """Build the configured kernel."""
        return self.run("buildkernel")

    def install_kernel(self) -> BuildResult:
        """Install the configured kernel."""
        return self.run("installkernel")

    def __repr__(self) -> str:
        return (
            f"BuildSession(src_dir={str(self.src_dir)!r}, kernel={self.kernel!r}, "
            f"permanent_error={self.permanent_error!r})"
        )
