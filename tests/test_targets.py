"""Tests for bsdsrc.targets."""

from __future__ import annotations

import pytest

from bsdsrc.config import SourceConfig
from bsdsrc.errors import ErrorCode
from bsdsrc.targets import KernelTarget, Target, _target_registry, lookup, target


@pytest.fixture
def _clean_registry():
    saved = _target_registry.copy()
    yield
    _target_registry.clear()
    _target_registry.update(saved)


class TestRegistry:
    def test_builtin_targets_registered(self):
        assert {"buildworld", "installworld", "buildkernel", "installkernel"} <= set(_target_registry)

    def test_lookup_returns_instance(self):
        tgt = lookup("buildworld")
        assert isinstance(tgt, Target)
        assert tgt.name == "buildworld"

    def test_lookup_unknown_raises(self):
        with pytest.raises(ValueError, match="Unknown make target: 'universe'"):
            lookup("universe")

    @pytest.mark.usefixtures("_clean_registry")
    def test_decorator_registers_and_names(self):
        @target("kernel-toolchain")
        class KernelToolchain(Target):
            error_code = ErrorCode.BUILD_KERNEL

        assert _target_registry["kernel-toolchain"] is KernelToolchain
        assert KernelToolchain.name == "kernel-toolchain"

    @pytest.mark.parametrize(
        "name,code",
        [
            ("buildworld", ErrorCode.BUILD_WORLD),
            ("installworld", ErrorCode.INSTALL_WORLD),
            ("buildkernel", ErrorCode.BUILD_KERNEL),
            ("installkernel", ErrorCode.INSTALL_KERNEL),
        ],
    )
    def test_error_codes(self, name, code):
        assert lookup(name).error_code is code


class TestArgv:
    def test_world_targets_omit_kernconf(self):
        config = SourceConfig(make_conf="/dev/null")
        assert lookup("installworld").argv(config) == [
            "make",
            "installworld",
            "__MAKE_CONF=/dev/null",
        ]

    def test_kernel_targets_add_kernconf(self):
        config = SourceConfig(kernel="GENERIC-NODEBUG")
        tgt = lookup("buildkernel")
        assert isinstance(tgt, KernelTarget)
        assert tgt.make_args(config) == [
            "__MAKE_CONF=/etc/make.conf",
            "KERNCONF=GENERIC-NODEBUG",
        ]

    def test_install_kernel_runs_installkernel(self):
        assert lookup("installkernel").argv(SourceConfig())[1] == "installkernel"
