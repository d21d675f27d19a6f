"""API group identity and the condition types and reasons used by the resources."""

from __future__ import annotations

from dataclasses import dataclass

VERSION = "v1alpha4"
"""The API version."""

GROUP_NAME = "infrastructure.cluster.x-k8s.io"
"""The name of the API group."""


@dataclass(frozen=True)
class GroupKind:
    """A kind qualified by its API group."""

    group: str
    kind: str

    def __str__(self) -> str:
        if not self.group:
            return self.kind
        return f"{self.kind}.{self.group}"


@dataclass(frozen=True)
class GroupVersion:
    """An API group together with one of its versions."""

    group: str
    version: str

    def __str__(self) -> str:
        if self.group:
            return f"{self.group}/{self.version}"
        return self.version

    def with_kind(self, kind: str) -> GroupKind:
        """Return the group-qualified kind for ``kind`` in this group."""
        return GroupKind(group=self.group, kind=kind)


GROUP_VERSION = GroupVersion(group=GROUP_NAME, version=VERSION)
"""The group version under which every resource of this package is served."""

# Conditions and reasons for the VSphereCluster object.
LOAD_BALANCER_AVAILABLE_CONDITION = "LoadBalancerAvailable"
LOAD_BALANCER_PROVISIONING_REASON = "LoadBalancerProvisioning"
LOAD_BALANCER_PROVISIONING_FAILED_REASON = "LoadBalancerProvisioningFailed"
CCM_AVAILABLE_CONDITION = "CCMAvailable"
CCM_PROVISIONING_FAILED_REASON = "CCMProvisioningFailed"
CSI_AVAILABLE_CONDITION = "CSIAvailable"
CSI_PROVISIONING_FAILED_REASON = "CSIProvisioningFailed"
VCENTER_AVAILABLE_CONDITION = "VCenterAvailable"
VCENTER_UNREACHABLE_REASON = "VCenterUnreachable"

# Conditions and reasons for the VSphereMachine and VSphereVM objects.
VM_PROVISIONED_CONDITION = "VMProvisioned"
WAITING_FOR_CLUSTER_INFRASTRUCTURE_REASON = "WaitingForClusterInfrastructure"
WAITING_FOR_BOOTSTRAP_DATA_REASON = "WaitingForBootstrapData"
WAITING_FOR_STATIC_IP_ALLOCATION_REASON = "WaitingForStaticIPAllocation"
CLONING_REASON = "Cloning"
CLONING_FAILED_REASON = "CloningFailed"
POWERING_ON_REASON = "PoweringOn"
POWERING_ON_FAILED_REASON = "PoweringOnFailed"
TASK_FAILURE = "TaskFailure"
WAITING_FOR_NETWORK_ADDRESSES_REASON = "WaitingForNetworkAddresses"