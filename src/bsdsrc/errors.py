"""Error codes and the exception raised for failed builds."""

from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    """Failure kinds recorded on a build session."""

    SOURCE_MISSING = 0
    BUILD_WORLD = 1
    INSTALL_WORLD = 2
    BUILD_KERNEL = 3
    INSTALL_KERNEL = 4

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS: dict[ErrorCode, str] = {
    ErrorCode.SOURCE_MISSING: "the source directory does not exist",
    ErrorCode.BUILD_WORLD: "'make buildworld' failed",
    ErrorCode.INSTALL_WORLD: "'make installworld' failed",
    ErrorCode.BUILD_KERNEL: "'make buildkernel' failed",
    ErrorCode.INSTALL_KERNEL: "'make installkernel' failed",
}


class BuildError(Exception):
    """A build operation did not succeed."""

    def __init__(
        self,
        code: ErrorCode,
        *,
        exit_status: int | None = None,
        output: str = "",
    ) -> None:
        message = f"error {int(code)}: {code.description}"
        if exit_status is not None:
            message += f" (exit status {exit_status})"
        super().__init__(message)
        self.code = code
        self.exit_status = exit_status
        self.output = output
