"""The VSphereDeploymentZone and VSphereFailureDomain resources."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from .types import Condition, ListMeta, ObjectMeta


def _kept(default: Any = None, *, factory: Any = None) -> Any:
    if factory is not None:
        return field(default_factory=factory, metadata={"omitempty": False})
    return field(default=default, metadata={"omitempty": False})


def _pointer(default: Any = None) -> Any:
    return field(default=default, metadata={"pointer": True})


class FailureDomainType(str, Enum):
    """The vSphere construct that makes up a failure domain."""

    HOST_GROUP = "HostGroup"
    COMPUTE_CLUSTER = "ComputeCluster"
    DATACENTER = "Datacenter"


@dataclass
class Network:
    """Networking of machines placed in a deployment zone."""

    network_name: str = ""
    dhcp4: bool | None = _pointer()
    dhcp6: bool | None = _pointer()


@dataclass
class PlacementConstraint:
    """Where VMs are placed within a failure domain."""

    resource_pool: str = ""
    datastore: str = ""
    network: list[Network] = field(default_factory=list, metadata={"json": "Network"})
    folder: str = ""


@dataclass
class VSphereDeploymentZoneSpec:
    """The desired state of a VSphereDeploymentZone."""

    server: str = ""
    failure_domain: str = ""
    control_plane: bool | None = _pointer()
    placement_constraint: PlacementConstraint = field(default_factory=PlacementConstraint)


@dataclass
class VSphereDeploymentZoneStatus:
    """The observed state of a VSphereDeploymentZone."""

    ready: bool | None = _pointer()
    conditions: list[Condition] = field(default_factory=list)


@dataclass
class VSphereDeploymentZone:
    """A zone of a vSphere endpoint in which machines may be deployed."""

    KIND: ClassVar[str] = "VSphereDeploymentZone"

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: VSphereDeploymentZoneSpec = field(default_factory=VSphereDeploymentZoneSpec)
    status: VSphereDeploymentZoneStatus = field(default_factory=VSphereDeploymentZoneStatus)


@dataclass
class VSphereDeploymentZoneList:
    """A list of VSphereDeploymentZone objects."""

    metadata: ListMeta = field(default_factory=ListMeta)
    items: list[VSphereDeploymentZone] = _kept(factory=list)


@dataclass
class FailureDomain:
    """The name and type of a region or zone."""

    name: str = _kept("")
    type: FailureDomainType | None = _kept(None)
    tag_category: str = _kept("")
    auto_configure: bool | None = _pointer()


@dataclass
class FailureDomainHostGroup:
    """A host group acting as a failure domain."""

    name: str = _kept("")
    auto_configure: bool | None = _pointer()


@dataclass
class Topology:
    """The vSphere constructs that describe a failure domain."""

    datacenter: str = _kept("")
    compute_cluster: str | None = _pointer()
    host_group: FailureDomainHostGroup | None = _pointer()


@dataclass
class VSphereFailureDomainSpec:
    """The desired state of a VSphereFailureDomain."""

    region: FailureDomain = _kept(factory=FailureDomain)
    zone: FailureDomain = _kept(factory=FailureDomain)
    topology: Topology = _kept(factory=Topology)


@dataclass
class VSphereFailureDomain:
    """A failure domain described by vSphere tags and topology."""

    KIND: ClassVar[str] = "VSphereFailureDomain"

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: VSphereFailureDomainSpec = field(default_factory=VSphereFailureDomainSpec)


@dataclass
class VSphereFailureDomainList:
    """A list of VSphereFailureDomain objects."""

    metadata: ListMeta = field(default_factory=ListMeta)
    items: list[VSphereFailureDomain] = _kept(factory=list)