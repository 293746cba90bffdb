"""Kernel package exposing the runtime entrypoints."""

from .kernel import Kernel
from .plugin import ServicePlugin

__all__ = ["Kernel", "ServicePlugin"]
