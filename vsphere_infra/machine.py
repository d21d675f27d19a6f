"""The VSphereMachine and VSphereMachineTemplate resources and their validation."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from typing import Any, ClassVar

from .constants import GROUP_VERSION, GroupKind
from .errors import FieldError, aggregate_errors, forbidden, invalid
from .types import (
    Condition,
    ListMeta,
    MachineAddress,
    NetworkStatus,
    ObjectMeta,
    VirtualMachineCloneSpec,
    to_unstructured,
)

MACHINE_FINALIZER = "vspheremachine.infrastructure.cluster.x-k8s.io"
"""Lets the machine reconciler clean up vSphere resources before the object is removed."""

_PREFERRED_CIDR_DETAIL = "cannot be set, as it will be removed and is no longer used"
_CIDR_DETAIL = "ip addresses should be in the CIDR format"
_TEMPLATE_DETAIL = "cannot be set in templates"


def _kept(default: Any = None, *, factory: Any = None) -> Any:
    if factory is not None:
        return field(default_factory=factory, metadata={"omitempty": False})
    return field(default=default, metadata={"omitempty": False})


def _pointer(default: Any = None, *, json: str | None = None) -> Any:
    metadata: dict[str, Any] = {"pointer": True}
    if json is not None:
        metadata["json"] = json
    return field(default=default, metadata=metadata)


def _is_cidr(text: str) -> bool:
    """Return True if ``text`` is an address followed by a slash and a prefix length."""
    address, slash, prefix = text.rpartition("/")
    if not slash or not prefix.isdigit() or not prefix.isascii() or "%" in address:
        return False
    try:
        ip = ipaddress.ip_address(address)
    except ValueError:
        return False
    return int(prefix) <= ip.max_prefixlen


def _check_addresses(spec: VirtualMachineCloneSpec) -> list[FieldError]:
    errors: list[FieldError] = []
    if spec.network.preferred_api_server_cidr:
        errors.append(
            invalid(
                ["spec", "PreferredAPIServerCIDR"],
                spec.network.preferred_api_server_cidr,
                _PREFERRED_CIDR_DETAIL,
            )
        )
    for i, device in enumerate(spec.network.devices):
        for j, ip in enumerate(device.ip_addrs):
            if not _is_cidr(ip):
                errors.append(
                    invalid(
                        ["spec", "network", f"devices[{i}]", f"ipAddrs[{j}]"],
                        ip,
                        _CIDR_DETAIL,
                    )
                )
    return errors


@dataclass
class VSphereMachineSpec(VirtualMachineCloneSpec):
    """The desired state of a VSphereMachine."""

    provider_id: str | None = _pointer(json="providerID")
    failure_domain: str | None = _pointer()


@dataclass
class VSphereMachineStatus:
    """The observed state of a VSphereMachine."""

    ready: bool = _kept(False)
    addresses: list[MachineAddress] = field(default_factory=list)
    network: list[NetworkStatus] = field(default_factory=list)
    failure_reason: str | None = _pointer()
    failure_message: str | None = _pointer()
    conditions: list[Condition] = field(default_factory=list)


@dataclass
class VSphereMachine:
    """A machine backed by a vSphere virtual machine."""

    KIND: ClassVar[str] = "VSphereMachine"

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: VSphereMachineSpec = field(default_factory=VSphereMachineSpec)
    status: VSphereMachineStatus = field(default_factory=VSphereMachineStatus)

    @property
    def group_kind(self) -> GroupKind:
        """The group-qualified kind of this resource."""
        return GROUP_VERSION.with_kind(self.KIND)

    def validate_create(self) -> None:
        """Raise InvalidError if the machine may not be created as it stands."""
        aggregate_errors(self.group_kind, self.metadata.name, _check_addresses(self.spec))

    def validate_update(self, old: VSphereMachine) -> None:
        """Raise InvalidError if the update changes more than the provider ID or devices."""
        new_spec = to_unstructured(self.spec)
        old_spec = to_unstructured(old.spec)
        for spec in (new_spec, old_spec):
            spec.pop("providerID", None)
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
class VSphereMachineList:
    """A list of VSphereMachine objects."""

    metadata: ListMeta = field(default_factory=ListMeta)
    items: list[VSphereMachine] = _kept(factory=list)


@dataclass
class VSphereMachineTemplateResource:
    """The data needed to create a VSphereMachine from a template."""

    spec: VSphereMachineSpec = _kept(factory=VSphereMachineSpec)


@dataclass
class VSphereMachineTemplateSpec:
    """The desired state of a VSphereMachineTemplate."""

    template: VSphereMachineTemplateResource = _kept(factory=VSphereMachineTemplateResource)


@dataclass
class VSphereMachineTemplate:
    """A template from which VSphereMachines are created."""

    KIND: ClassVar[str] = "VSphereMachineTemplate"

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: VSphereMachineTemplateSpec = field(default_factory=VSphereMachineTemplateSpec)

    @property
    def group_kind(self) -> GroupKind:
        """The group-qualified kind of this resource."""
        return GROUP_VERSION.with_kind(self.KIND)

    def validate_create(self) -> None:
        """Raise InvalidError if the template sets fields that templates may not set."""
        spec = self.spec.template.spec
        errors: list[FieldError] = []
        if spec.network.preferred_api_server_cidr:
            errors.append(
                invalid(
                    ["spec", "PreferredAPIServerCIDR"],
                    spec.network.preferred_api_server_cidr,
                    _PREFERRED_CIDR_DETAIL,
                )
            )
        if spec.provider_id is not None:
            errors.append(
                forbidden(["spec", "template", "spec", "providerID"], _TEMPLATE_DETAIL)
            )
        errors.extend(
            forbidden(
                ["spec", "template", "spec", "network", "devices", "ipAddrs"],
                _TEMPLATE_DETAIL,
            )
            for device in spec.network.devices
            if device.ip_addrs
        )
        aggregate_errors(self.group_kind, self.metadata.name, errors)

    def validate_update(self, old: VSphereMachineTemplate) -> None:
        """Raise FieldError if the template's spec changes at all."""
        if self.spec != old.spec:
            raise forbidden(["spec"], "VSphereMachineTemplateSpec is immutable")

    def validate_delete(self) -> None:
        """Accept any deletion; no rule restricts it."""
        errors: list[FieldError] = []
        aggregate_errors(self.group_kind, self.metadata.name, errors)


@dataclass
class VSphereMachineTemplateList:
    """A list of VSphereMachineTemplate objects."""

    metadata: ListMeta = field(default_factory=ListMeta)
    items: list[VSphereMachineTemplate] = _kept(factory=list)