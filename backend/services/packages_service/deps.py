"""Dependency registration for the packages service."""

from __future__ import annotations

from kernel import Kernel
from kernel.runtime import get_kernel

from .client import KubernetesResourceClient, ResourceClient
from .hooks import ConfigurationHooks, Hooks, ProviderHooks
from .schemas import PackageKind


CAPABILITY_RESOURCE_CLIENT = "capability.packages.resource_client"
CAPABILITY_PROVIDER_HOOKS = "capability.packages.provider_hooks"
CAPABILITY_CONFIGURATION_HOOKS = "capability.packages.configuration_hooks"

_HOOK_CAPABILITIES = {
    PackageKind.PROVIDER: CAPABILITY_PROVIDER_HOOKS,
    PackageKind.CONFIGURATION: CAPABILITY_CONFIGURATION_HOOKS,
}


def _create_resource_client(kernel: Kernel) -> ResourceClient:
    settings = kernel.settings
    return KubernetesResourceClient(
        settings.KUBE_API_SERVER,
        field_manager=settings.FIELD_MANAGER,
        token=settings.KUBE_BEARER_TOKEN,
        verify=settings.KUBE_VERIFY,
    )


def _create_provider_hooks(kernel: Kernel) -> ProviderHooks:
    return ProviderHooks(
        kernel.resolve(CAPABILITY_RESOURCE_CLIENT),
        namespace=kernel.settings.PACKAGE_NAMESPACE,
    )


def register_dependencies(kernel: Kernel) -> None:
    """Register kernel capabilities consumed by the packages service."""

    kernel.register_capability(CAPABILITY_RESOURCE_CLIENT, _create_resource_client)
    kernel.register_capability(CAPABILITY_PROVIDER_HOOKS, _create_provider_hooks)
    kernel.register_capability(CAPABILITY_CONFIGURATION_HOOKS, lambda _: ConfigurationHooks())


def get_hooks(kind: PackageKind) -> Hooks:
    """Resolve the hooks implementation for a package kind."""

    kernel = get_kernel()
    return kernel.resolve(_HOOK_CAPABILITIES[PackageKind(kind)])


__all__ = [
    "CAPABILITY_CONFIGURATION_HOOKS",
    "CAPABILITY_PROVIDER_HOOKS",
    "CAPABILITY_RESOURCE_CLIENT",
    "get_hooks",
    "register_dependencies",
]
