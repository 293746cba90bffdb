"""Packages service plugin wiring hook capabilities and routers."""

from __future__ import annotations

from kernel import Kernel, ServicePlugin

from . import deps
from .router import router


class PackagesPlugin(ServicePlugin):
    """Register the resource client, both hook variants and the hook endpoints."""

    name = "packages"

    def setup(self, kernel: Kernel) -> None:  # noqa: D401 - interface requirement
        deps.register_dependencies(kernel)
        kernel.include_router(router, prefix="/api/v1")


__all__ = ["PackagesPlugin"]
