"""Microkernel that owns the HTTP app, shared capabilities and service plugins."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from fastapi import APIRouter, FastAPI

from core.config import Settings, get_settings, set_settings

from .plugin import ServicePlugin
from .runtime import set_kernel


logger = logging.getLogger(__name__)

CapabilityFactory = Callable[["Kernel"], Any]


class Kernel:
    """Coordinates capability factories and the plugins that consume them."""

    def __init__(
        self,
        *,
        settings: Optional[Settings] = None,
        debug: Optional[bool] = None,
        title: str = "Package Revision Hooks",
    ) -> None:
        self.settings = settings or get_settings()
        set_settings(self.settings)
        self.debug = bool(debug) if debug is not None else False

        self.app = FastAPI(debug=self.debug, title=title)

        self._capability_factories: Dict[str, CapabilityFactory] = {}
        self._capability_cache: Dict[str, Any] = {}
        self._capability_singletons: Dict[str, bool] = {}
        self._registered_plugins: Dict[str, ServicePlugin] = {}

        set_kernel(self)
        self.register_capability("settings", lambda _: self.settings)

    # ------------------------------------------------------------------
    # Capabilities
    # ------------------------------------------------------------------
    def register_capability(
        self,
        name: str,
        factory: CapabilityFactory,
        *,
        singleton: bool = True,
    ) -> None:
        """Register a lazily-created capability that other modules can resolve."""

        if name in self._capability_factories:
            raise ValueError(f"Capability '{name}' already registered")
        self._capability_factories[name] = factory
        self._capability_singletons[name] = singleton

    def override_capability(self, name: str, instance: Any) -> None:
        """Pin a concrete instance for ``name``, bypassing its factory."""

        if name not in self._capability_factories:
            raise KeyError(f"Capability '{name}' is not registered")
        self._capability_cache[name] = instance

    def resolve(self, name: str) -> Any:
        if name not in self._capability_factories:
            raise KeyError(f"Capability '{name}' is not registered")

        if name in self._capability_cache:
            return self._capability_cache[name]

        instance = self._capability_factories[name](self)
        if self._capability_singletons.get(name, True):
            self._capability_cache[name] = instance
        return instance

    @property
    def capabilities(self) -> List[str]:
        return sorted(self._capability_factories)

    # ------------------------------------------------------------------
    # Routers and plugins
    # ------------------------------------------------------------------
    def include_router(self, router: APIRouter, *, prefix: str = "") -> None:
        self.app.include_router(router, prefix=prefix)

    def register_plugin(self, plugin: ServicePlugin) -> None:
        if plugin.name in self._registered_plugins:
            raise ValueError(f"Plugin '{plugin.name}' already registered")
        plugin.setup(self)
        self._registered_plugins[plugin.name] = plugin
        logger.debug("Registered plugin %s", plugin.name)


__all__ = ["Kernel"]
