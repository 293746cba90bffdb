"""Unit tests for the kernel capability registry."""

from __future__ import annotations

import pytest

from core.config import Settings
from kernel import Kernel, ServicePlugin
from kernel.runtime import get_kernel


@pytest.fixture
def kernel() -> Kernel:
    return Kernel(settings=Settings())


def test_kernel_registers_itself_and_settings(kernel: Kernel):
    assert get_kernel() is kernel
    assert kernel.resolve("settings") is kernel.settings


def test_singleton_capabilities_are_cached(kernel: Kernel):
    kernel.register_capability("counter", lambda _: object())
    assert kernel.resolve("counter") is kernel.resolve("counter")


def test_non_singleton_capabilities_are_rebuilt(kernel: Kernel):
    kernel.register_capability("fresh", lambda _: object(), singleton=False)
    assert kernel.resolve("fresh") is not kernel.resolve("fresh")


def test_duplicate_and_unknown_capabilities(kernel: Kernel):
    kernel.register_capability("dup", lambda _: 1)
    with pytest.raises(ValueError):
        kernel.register_capability("dup", lambda _: 2)
    with pytest.raises(KeyError):
        kernel.resolve("missing")
    with pytest.raises(KeyError):
        kernel.override_capability("missing", object())


def test_override_capability_bypasses_factory(kernel: Kernel):
    def _boom(_):
        raise AssertionError("factory should not run")

    kernel.register_capability("client", _boom)
    sentinel = object()
    kernel.override_capability("client", sentinel)
    assert kernel.resolve("client") is sentinel


def test_plugins_are_set_up_once(kernel: Kernel):
    class _Plugin(ServicePlugin):
        name = "demo"

        def setup(self, k: Kernel) -> None:
            k.register_capability("demo.value", lambda _: 42)

    kernel.register_plugin(_Plugin())
    assert kernel.resolve("demo.value") == 42
    assert "demo.value" in kernel.capabilities
    with pytest.raises(ValueError):
        kernel.register_plugin(_Plugin())
