"""Shared value types of the vSphere infrastructure API and their unstructured form.

Dataclass fields map to unstructured keys by camel-casing their names. Field
metadata may override this: ``json`` gives the key, ``omitempty=False`` keeps a
field even when it holds its zero value, and ``pointer=True`` drops a field only
when it is ``None``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any

ANNOTATION_CLUSTER_INFRASTRUCTURE_READY = (
    "vsphere.infrastructure.cluster.x-k8s.io/infrastructure-ready"
)
ANNOTATION_CONTROL_PLANE_READY = "vsphere.infrastructure.cluster.x-k8s.io/control-plane-ready"
VALUE_READY = "true"


class CloneMode(str, Enum):
    """How a VM is cloned from its template."""

    FULL_CLONE = "fullClone"
    LINKED_CLONE = "linkedClone"


class VirtualMachineState(str, Enum):
    """The state of a VM."""

    NOT_FOUND = "notfound"
    PENDING = "pending"
    READY = "ready"


class VirtualMachinePowerState(str, Enum):
    """The power state of a VM."""

    POWERED_ON = "poweredOn"
    POWERED_OFF = "poweredOff"
    SUSPENDED = "suspended"


class VSphereMachineProviderConditionType(str, Enum):
    """A condition type of a vSphere machine instance."""

    MACHINE_CREATED = "MachineCreated"


def _required(default: Any = None, *, factory: Any = None, json: str | None = None) -> Any:
    metadata: dict[str, Any] = {"omitempty": False}
    if json is not None:
        metadata["json"] = json
    if factory is not None:
        return field(default_factory=factory, metadata=metadata)
    return field(default=default, metadata=metadata)


def _named(json: str, default: Any = None, *, factory: Any = None) -> Any:
    if factory is not None:
        return field(default_factory=factory, metadata={"json": json})
    return field(default=default, metadata={"json": json})


def _pointer(default: Any = None) -> Any:
    return field(default=default, metadata={"pointer": True})


@dataclass
class ObjectMeta:
    """Identifying metadata of a stored object."""

    name: str = ""
    namespace: str = ""
    uid: str = ""
    resource_version: str = ""
    generation: int = 0
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    finalizers: list[str] = field(default_factory=list)


@dataclass
class ListMeta:
    """Metadata of a list of objects."""

    resource_version: str = ""
    continue_: str = _named("continue", "")
    remaining_item_count: int | None = _pointer()


@dataclass
class ObjectReference:
    """A reference to another object."""

    kind: str = ""
    namespace: str = ""
    name: str = ""
    uid: str = ""
    api_version: str = ""
    resource_version: str = ""
    field_path: str = ""


@dataclass
class Condition:
    """An observation of an object's state."""

    type: str = _required("")
    status: str = _required("")
    severity: str = ""
    last_transition_time: str | None = None
    reason: str = ""
    message: str = ""


@dataclass
class MachineAddress:
    """An address assigned to a machine."""

    type: str = _required("")
    address: str = _required("")


@dataclass
class NetworkRouteSpec:
    """A static network route."""

    to: str = _required("")
    via: str = _required("")
    metric: int = _required(0)


@dataclass
class NetworkDeviceSpec:
    """Network configuration of one of a VM's network devices."""

    network_name: str = _required("")
    device_name: str = ""
    dhcp4: bool = False
    dhcp6: bool = False
    gateway4: str = ""
    gateway6: str = ""
    ip_addrs: list[str] = field(default_factory=list)
    mtu: int | None = _pointer()
    mac_addr: str = ""
    nameservers: list[str] = field(default_factory=list)
    routes: list[NetworkRouteSpec] = field(default_factory=list)
    search_domains: list[str] = field(default_factory=list)


@dataclass
class NetworkSpec:
    """A VM's network configuration."""

    devices: list[NetworkDeviceSpec] = _required(factory=list)
    routes: list[NetworkRouteSpec] = field(default_factory=list)
    preferred_api_server_cidr: str = _named("preferredAPIServerCidr", "")


@dataclass
class VirtualMachineCloneSpec:
    """Information used to clone a virtual machine from a template."""

    template: str = _required("")
    clone_mode: CloneMode | None = None
    snapshot: str = ""
    server: str = ""
    thumbprint: str = ""
    datacenter: str = ""
    folder: str = ""
    datastore: str = ""
    storage_policy_name: str = ""
    resource_pool: str = ""
    network: NetworkSpec = _required(factory=NetworkSpec)
    num_cpus: int = _named("numCPUs", 0)
    num_cores_per_socket: int = 0
    memory_mib: int = _named("memoryMiB", 0)
    disk_gib: int = _named("diskGiB", 0)
    custom_vmx_keys: dict[str, str] = _named("customVMXKeys", factory=dict)


@dataclass
class APIEndpoint:
    """A reachable Kubernetes API endpoint."""

    host: str = _required("")
    port: int = _required(0)

    def is_zero(self) -> bool:
        """Return True if either the host or the port is unset."""
        return self.host == "" or self.port == 0

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass
class NetworkStatus:
    """Information about one of a VM's networks."""

    connected: bool = False
    ip_addrs: list[str] = field(default_factory=list)
    mac_addr: str = _required("")
    network_name: str = ""


@dataclass
class VirtualMachine:
    """Data about a vSphere virtual machine object."""

    name: str = _required("")
    bios_uuid: str = _required("", json="biosUUID")
    state: VirtualMachineState | None = _required(None)
    network: list[NetworkStatus] = _required(factory=list)


@dataclass
class SSHUser:
    """A user granted remote access to a system."""

    name: str = _required("")
    authorized_keys: list[str] = _required(factory=list)


def _camel(name: str) -> str:
    head, *rest = name.rstrip("_").split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _is_zero(value: Any, pointer: bool) -> bool:
    if value is None:
        return True
    if pointer or is_dataclass(value):
        return False
    if isinstance(value, (str, bytes, bool, int, float, list, tuple, dict)):
        return not value
    return False


def _key(key: Any) -> str:
    return key.value if isinstance(key, Enum) else str(key)


def to_unstructured(obj: Any) -> Any:
    """Convert an API object into plain dicts, lists and scalars keyed by wire names."""
    if is_dataclass(obj) and not isinstance(obj, type):
        result: dict[str, Any] = {}
        for f in fields(obj):
            value = getattr(obj, f.name)
            omit_empty = f.metadata.get("omitempty", True)
            if omit_empty and _is_zero(value, f.metadata.get("pointer", False)):
                continue
            result[f.metadata.get("json", _camel(f.name))] = to_unstructured(value)
        return result
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, Mapping):
        return {_key(k): to_unstructured(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_unstructured(item) for item in obj]
    return obj