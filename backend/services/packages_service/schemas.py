"""Data model for packages, their revisions and the workload resources they own."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional


REVISION_API_VERSION = "pkg.extensions.io/v1beta1"
LABEL_REVISION = "pkg.extensions.io/revision"
LABEL_REVISION_NUMBER = "pkg.extensions.io/revision-number"
CONDITION_AVAILABLE = "Available"
CONDITION_FALSE = "False"


class PackageKind(str, Enum):
    PROVIDER = "Provider"
    CONFIGURATION = "Configuration"


class DesiredState(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


# ----------------------------------------------------------------------
# Package metadata
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class Dependency:
    version: str
    provider: Optional[str] = None
    configuration: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.provider is None) == (self.configuration is None):
            raise ValueError("A dependency must name exactly one of provider or configuration")

    @property
    def package(self) -> str:
        return self.provider or self.configuration or ""


@dataclass
class Package:
    """Declared metadata of an extension package."""

    kind: ClassVar[PackageKind]

    crossplane_version: Optional[str] = None
    depends_on: List[Dependency] = field(default_factory=list)


@dataclass
class Provider(Package):
    kind: ClassVar[PackageKind] = PackageKind.PROVIDER


@dataclass
class Configuration(Package):
    kind: ClassVar[PackageKind] = PackageKind.CONFIGURATION


# ----------------------------------------------------------------------
# Revisions
# ----------------------------------------------------------------------
@dataclass
class PackageRevision:
    """A specific installed version of a package."""

    kind: ClassVar[PackageKind]

    name: str
    package: str
    desired_state: DesiredState = DesiredState.INACTIVE
    uid: str = ""
    revision: int = 1
    package_pull_policy: Optional[str] = None

    @property
    def api_version(self) -> str:
        return REVISION_API_VERSION

    @property
    def revision_kind(self) -> str:
        return f"{self.kind.value}Revision"

    @property
    def is_active(self) -> bool:
        return DesiredState(self.desired_state) is DesiredState.ACTIVE


@dataclass
class ProviderRevision(PackageRevision):
    kind: ClassVar[PackageKind] = PackageKind.PROVIDER


@dataclass
class ConfigurationRevision(PackageRevision):
    kind: ClassVar[PackageKind] = PackageKind.CONFIGURATION


# ----------------------------------------------------------------------
# Managed workload resources
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class OwnerReference:
    api_version: str
    kind: str
    name: str
    uid: str
    controller: bool = True
    block_owner_deletion: bool = True

    def to_manifest(self) -> Dict[str, Any]:
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "name": self.name,
            "uid": self.uid,
            "controller": self.controller,
            "blockOwnerDeletion": self.block_owner_deletion,
        }

    @classmethod
    def from_manifest(cls, item: Dict[str, Any]) -> "OwnerReference":
        return cls(
            api_version=item.get("apiVersion", ""),
            kind=item.get("kind", ""),
            name=item.get("name", ""),
            uid=item.get("uid", ""),
            controller=bool(item.get("controller", False)),
            block_owner_deletion=bool(item.get("blockOwnerDeletion", False)),
        )


@dataclass
class ObjectMeta:
    name: str
    namespace: str
    labels: Dict[str, str] = field(default_factory=dict)
    owner_references: List[OwnerReference] = field(default_factory=list)

    def to_manifest(self) -> Dict[str, Any]:
        meta: Dict[str, Any] = {"name": self.name, "namespace": self.namespace}
        if self.labels:
            meta["labels"] = dict(self.labels)
        if self.owner_references:
            meta["ownerReferences"] = [ref.to_manifest() for ref in self.owner_references]
        return meta

    @classmethod
    def from_manifest(cls, item: Dict[str, Any]) -> "ObjectMeta":
        return cls(
            name=item.get("name", ""),
            namespace=item.get("namespace", ""),
            labels=dict(item.get("labels") or {}),
            owner_references=[OwnerReference.from_manifest(ref) for ref in item.get("ownerReferences") or []],
        )


@dataclass
class ManagedResource:
    """An object this subsystem applies to or deletes from the orchestration platform."""

    API_VERSION: ClassVar[str]
    KIND: ClassVar[str]
    API_PREFIX: ClassVar[str]
    PLURAL: ClassVar[str]

    metadata: ObjectMeta

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    def path(self) -> str:
        # An empty name addresses the whole collection
        if not self.name or "/" in self.name:
            raise ValueError(f"invalid {self.KIND} name {self.name!r}")
        return f"{self.API_PREFIX}/namespaces/{self.namespace}/{self.PLURAL}/{self.name}"

    def to_manifest(self) -> Dict[str, Any]:
        return {
            "apiVersion": self.API_VERSION,
            "kind": self.KIND,
            "metadata": self.metadata.to_manifest(),
        }


@dataclass
class ServiceAccount(ManagedResource):
    API_VERSION: ClassVar[str] = "v1"
    KIND: ClassVar[str] = "ServiceAccount"
    API_PREFIX: ClassVar[str] = "api/v1"
    PLURAL: ClassVar[str] = "serviceaccounts"

    @classmethod
    def from_manifest(cls, item: Dict[str, Any]) -> "ServiceAccount":
        return cls(metadata=ObjectMeta.from_manifest(item.get("metadata") or {}))


@dataclass
class DeploymentCondition:
    type: str
    status: str
    reason: str = ""
    message: str = ""

    @classmethod
    def from_manifest(cls, item: Dict[str, Any]) -> "DeploymentCondition":
        return cls(
            type=item.get("type", ""),
            status=item.get("status", ""),
            reason=item.get("reason", ""),
            message=item.get("message", ""),
        )


@dataclass
class Deployment(ManagedResource):
    API_VERSION: ClassVar[str] = "apps/v1"
    KIND: ClassVar[str] = "Deployment"
    API_PREFIX: ClassVar[str] = "apis/apps/v1"
    PLURAL: ClassVar[str] = "deployments"

    spec: Dict[str, Any] = field(default_factory=dict)
    conditions: List[DeploymentCondition] = field(default_factory=list)

    def availability(self) -> Optional[DeploymentCondition]:
        """Return the ``Available`` condition, if the platform has reported one."""

        for condition in self.conditions:
            if condition.type == CONDITION_AVAILABLE:
                return condition
        return None

    def to_manifest(self) -> Dict[str, Any]:
        manifest = super().to_manifest()
        manifest["spec"] = self.spec
        return manifest

    @classmethod
    def from_manifest(cls, item: Dict[str, Any]) -> "Deployment":
        status = item.get("status") or {}
        return cls(
            metadata=ObjectMeta.from_manifest(item.get("metadata") or {}),
            spec=dict(item.get("spec") or {}),
            conditions=[DeploymentCondition.from_manifest(c) for c in status.get("conditions") or []],
        )


__all__ = [
    "CONDITION_AVAILABLE",
    "CONDITION_FALSE",
    "LABEL_REVISION",
    "LABEL_REVISION_NUMBER",
    "Configuration",
    "ConfigurationRevision",
    "Dependency",
    "Deployment",
    "DeploymentCondition",
    "DesiredState",
    "ManagedResource",
    "ObjectMeta",
    "OwnerReference",
    "Package",
    "PackageKind",
    "PackageRevision",
    "Provider",
    "ProviderRevision",
    "ServiceAccount",
]
