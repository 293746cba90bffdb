"""Contract for services that contribute capabilities and routes to the kernel."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .kernel import Kernel


class ServicePlugin(ABC):
    """A named unit of wiring, set up exactly once per kernel."""

    name: str

    @abstractmethod
    def setup(self, kernel: "Kernel") -> None:
        """Register capabilities and routers on ``kernel``."""


__all__ = ["ServicePlugin"]
