"""Request and response bodies for the hook invocation endpoints."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from .schemas import (
    Configuration,
    ConfigurationRevision,
    Dependency,
    DesiredState,
    Package,
    PackageKind,
    PackageRevision,
    Provider,
    ProviderRevision,
)


_PACKAGE_TYPES = {PackageKind.PROVIDER: Provider, PackageKind.CONFIGURATION: Configuration}
_REVISION_TYPES = {PackageKind.PROVIDER: ProviderRevision, PackageKind.CONFIGURATION: ConfigurationRevision}


class DependencyBody(BaseModel):
    version: str
    provider: Optional[str] = None
    configuration: Optional[str] = None

    @model_validator(mode="after")
    def _one_target(self) -> "DependencyBody":
        if (self.provider is None) == (self.configuration is None):
            raise ValueError("A dependency must name exactly one of provider or configuration")
        return self


class PackageBody(BaseModel):
    kind: PackageKind
    crossplane_version: Optional[str] = Field(default=None, description="Control plane version constraint")
    depends_on: List[DependencyBody] = Field(default_factory=list)

    def to_domain(self) -> Package:
        deps = [Dependency(version=d.version, provider=d.provider, configuration=d.configuration) for d in self.depends_on]
        return _PACKAGE_TYPES[self.kind](crossplane_version=self.crossplane_version, depends_on=deps)


class RevisionBody(BaseModel):
    kind: PackageKind
    name: str = Field(..., min_length=1)
    package: str = Field(..., description="Package image reference")
    desired_state: DesiredState
    uid: str = ""
    revision: int = 1
    package_pull_policy: Optional[str] = None

    def to_domain(self) -> PackageRevision:
        return _REVISION_TYPES[self.kind](
            name=self.name,
            package=self.package,
            desired_state=self.desired_state,
            uid=self.uid,
            revision=self.revision,
            package_pull_policy=self.package_pull_policy,
        )


class HookRequest(BaseModel):
    package: PackageBody
    revision: RevisionBody


class HookResponse(BaseModel):
    ok: bool = True


__all__ = ["DependencyBody", "HookRequest", "HookResponse", "PackageBody", "RevisionBody"]
