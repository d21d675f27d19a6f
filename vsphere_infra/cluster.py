"""The VSphereCluster and HAProxyLoadBalancer resources and VSphereCluster validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from .cloudprovider import CPIConfig
from .constants import GROUP_VERSION, GroupKind
from .errors import FieldError, aggregate_errors, invalid
from .types import (
    APIEndpoint,
    Condition,
    ListMeta,
    ObjectMeta,
    ObjectReference,
    SSHUser,
    VirtualMachineCloneSpec,
)

CLUSTER_FINALIZER = "vspherecluster.infrastructure.cluster.x-k8s.io"
"""Lets the cluster reconciler clean up vSphere resources before the object is removed."""

HAPROXY_LOAD_BALANCER_FINALIZER = "haproxyloadbalancer.infrastructure.cluster.x-k8s.io"
"""Lets a reconciler clean up load balancer resources before the object is removed."""


def _kept(factory: Any) -> Any:
    return field(default_factory=factory, metadata={"omitempty": False})


def _pointer(default: Any = None) -> Any:
    return field(default=default, metadata={"pointer": True})


@dataclass
class VSphereClusterSpec:
    """The desired state of a VSphereCluster."""

    server: str = ""
    insecure: bool | None = _pointer()
    thumbprint: str = ""
    cloud_provider_configuration: CPIConfig = field(default_factory=CPIConfig)
    control_plane_endpoint: APIEndpoint = _kept(APIEndpoint)
    load_balancer_ref: ObjectReference | None = _pointer()


@dataclass
class VSphereClusterStatus:
    """The observed state of a VSphereCluster."""

    ready: bool = False
    conditions: list[Condition] = field(default_factory=list)
    failure_domains: dict[str, Any] = field(default_factory=dict)


@dataclass
class VSphereCluster:
    """A cluster whose infrastructure lives on vSphere."""

    KIND: ClassVar[str] = "VSphereCluster"

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: VSphereClusterSpec = field(default_factory=VSphereClusterSpec)
    status: VSphereClusterStatus = field(default_factory=VSphereClusterStatus)

    @property
    def group_kind(self) -> GroupKind:
        """The group-qualified kind of this resource."""
        return GROUP_VERSION.with_kind(self.KIND)

    def validate_create(self) -> None:
        """Raise InvalidError if the cluster may not be created as it stands."""
        errors: list[FieldError] = []
        spec = self.spec
        if spec.thumbprint and spec.insecure:
            errors.append(
                invalid(
                    ["spec", "Insecure"],
                    spec.insecure,
                    "cannot be set to true at the same time as .spec.Thumbprint",
                )
            )
        aggregate_errors(self.group_kind, self.metadata.name, errors)

    def validate_update(self, old: VSphereCluster) -> None:
        """Accept any update; no field of the cluster is immutable."""
        errors: list[FieldError] = []
        aggregate_errors(self.group_kind, self.metadata.name, errors)

    def validate_delete(self) -> None:
        """Accept any deletion; no rule restricts it."""
        errors: list[FieldError] = []
        aggregate_errors(self.group_kind, self.metadata.name, errors)


@dataclass
class VSphereClusterList:
    """A list of VSphereCluster objects."""

    metadata: ListMeta = field(default_factory=ListMeta)
    items: list[VSphereCluster] = _kept(list)


@dataclass
class HAProxyLoadBalancerSpec:
    """The desired state of an HAProxyLoadBalancer."""

    virtual_machine_configuration: VirtualMachineCloneSpec = _kept(VirtualMachineCloneSpec)
    user: SSHUser | None = _pointer()


@dataclass
class HAProxyLoadBalancerStatus:
    """The observed state of an HAProxyLoadBalancer."""

    ready: bool = False
    address: str = ""


@dataclass
class HAProxyLoadBalancer:
    """A load balancer VM running HAProxy in front of the control plane."""

    KIND: ClassVar[str] = "HAProxyLoadBalancer"

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: HAProxyLoadBalancerSpec = field(default_factory=HAProxyLoadBalancerSpec)
    status: HAProxyLoadBalancerStatus = field(default_factory=HAProxyLoadBalancerStatus)


@dataclass
class HAProxyLoadBalancerList:
    """A list of HAProxyLoadBalancer objects."""

    metadata: ListMeta = field(default_factory=ListMeta)
    items: list[HAProxyLoadBalancer] = _kept(list)