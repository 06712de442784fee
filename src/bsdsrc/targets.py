"""Make targets and target registration."""

from __future__ import annotations

from abc import ABC

from .config import SourceConfig
from .errors import ErrorCode

_target_registry: dict[str, type[Target]] = {}


def target(name: str):
    """Register a Target class under its make target name."""

    def decorator(cls):
        cls.name = name
        _target_registry[name] = cls
        return cls

    return decorator


def lookup(name: str) -> Target:
    """Return an instance of the target registered under name."""
    if name not in _target_registry:
        raise ValueError(f"Unknown make target: '{name}'")
    return _target_registry[name]()


class Target(ABC):
    """Base class for all make targets run against the source tree."""

    name: str
    error_code: ErrorCode

    def make_args(self, config: SourceConfig) -> list[str]:
        """Variable assignments passed on the make command line."""
        return [f"__MAKE_CONF={config.make_conf}"]

    def argv(self, config: SourceConfig) -> list[str]:
        return [config.make, self.name, *self.make_args(config)]


class KernelTarget(Target):
    """A target that operates on the configured kernel."""

    def make_args(self, config: SourceConfig) -> list[str]:
        return [*super().make_args(config), f"KERNCONF={config.kernel}"]


@target("buildworld")
class BuildWorld(Target):
    error_code = ErrorCode.BUILD_WORLD


@target("installworld")
class InstallWorld(Target):
    error_code = ErrorCode.INSTALL_WORLD


@target("buildkernel")
class BuildKernel(KernelTarget):
    error_code = ErrorCode.BUILD_KERNEL


@target("installkernel")
class InstallKernel(KernelTarget):
    error_code = ErrorCode.INSTALL_KERNEL
