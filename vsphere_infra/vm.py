"""The VSphereVM resource and its validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from .constants import GROUP_VERSION, GroupKind
from .errors import FieldError, aggregate_errors, forbidden
from .machine import _check_addresses
from .types import (
    CloneMode,
    Condition,
    ListMeta,
    NetworkStatus,
    ObjectMeta,
    ObjectReference,
    VirtualMachineCloneSpec,
    to_unstructured,
)

VM_FINALIZER = "vspherevm.infrastructure.cluster.x-k8s.io"
"""Lets the reconciler clean up resources of a VSphereVM before the object is removed."""

# Spec keys that may change after creation.
_MUTABLE_SPEC_KEYS = ("biosUUID", "bootstrapRef")


def _kept(default: Any = None, *, factory: Any = None) -> Any:
    if factory is not None:
        return field(default_factory=factory, metadata={"omitempty": False})
    return field(default=default, metadata={"omitempty": False})


def _pointer(default: Any = None) -> Any:
    return field(default=default, metadata={"pointer": True})


@dataclass
class VSphereVMSpec(VirtualMachineCloneSpec):
    """The desired state of a VSphereVM."""

    bootstrap_ref: ObjectReference | None = _pointer()
    bios_uuid: str = field(default="", metadata={"json": "biosUUID"})


@dataclass
class VSphereVMStatus:
    """The observed state of a VSphereVM."""

    ready: bool = False
    addresses: list[str] = field(default_factory=list)
    clone_mode: CloneMode | None = None
    snapshot: str = ""
    task_ref: str = ""
    network: list[NetworkStatus] = field(default_factory=list)
    failure_reason: str | None = _pointer()
    failure_message: str | None = _pointer()
    conditions: list[Condition] = field(default_factory=list)


@dataclass
class VSphereVM:
    """A vSphere virtual machine managed by the infrastructure provider."""

    KIND: ClassVar[str] = "VSphereVM"

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: VSphereVMSpec = field(default_factory=VSphereVMSpec)
    status: VSphereVMStatus = field(default_factory=VSphereVMStatus)

    @property
    def group_kind(self) -> GroupKind:
        """The group-qualified kind of this resource."""
        return GROUP_VERSION.with_kind(self.KIND)

    def validate_create(self) -> None:
        """Raise InvalidError if the VM may not be created as it stands."""
        aggregate_errors(self.group_kind, self.metadata.name, _check_addresses(self.spec))

    def validate_update(self, old: VSphereVM) -> None:
        """Raise InvalidError if the update changes more than the BIOS UUID,
        bootstrap reference or network devices."""
        new_spec = to_unstructured(self.spec)
        old_spec = to_unstructured(old.spec)
        for spec in (new_spec, old_spec):
            for key in _MUTABLE_SPEC_KEYS:
                spec.pop(key, None)
            spec.get("network", {}).pop("devices", None)
        errors: list[FieldError] = []
        if new_spec != old_spec:
            errors.append(forbidden(["spec"], "cannot be modified"))
        aggregate_errors(self.group_kind, self.metadata.name, errors)

    def validate_delete(self) -> None:
        """Accept any deletion; no rule restricts it."""
        errors: list[FieldError] = []
        aggregate_errors(self.group_kind, self.metadata.name, errors)


@dataclass
class VSphereVMList:
    """A list of VSphereVM objects."""

    metadata: ListMeta = field(default_factory=ListMeta)
    items: list[VSphereVM] = _kept(factory=list)