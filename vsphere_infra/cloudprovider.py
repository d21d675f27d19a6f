"""Configuration of the vSphere cloud provider and its INI encoding.

Dataclass fields that appear in the INI data carry a ``gcfg`` entry in their
metadata naming the section or property. All sections and properties are
omitted from the encoded data when they hold their empty value.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

_INI_ESCAPE_CHARS = re.compile(r'([\\"])')
_SECTION_RE = re.compile(
    r'\[\s*([A-Za-z0-9.-]+)(?:\s+"((?:[^"\\]|\\.)*)")?\s*\]\s*(?:[;#].*)?'
)
_VARIABLE_RE = re.compile(r"([A-Za-z][A-Za-z0-9-]*)\s*(.*)")
_VALUE_ESCAPES = {"\\": "\\", '"': '"', "n": "\n", "t": "\t", "b": "\b"}
_TRUE_WORDS = {"true", "yes", "on", "1"}
_FALSE_WORDS = {"false", "no", "off", "0", ""}


class IniError(ValueError):
    """INI data could not be read into a cloud provider configuration."""

    def __init__(self, message: str, warnings: list[str] | None = None) -> None:
        super().__init__(message)
        self.warnings = list(warnings or [])


def _prop(
    name: str,
    default: Any,
    *,
    kind: type | None = None,
    json: str | None = None,
    pointer: bool = False,
) -> Any:
    metadata: dict[str, Any] = {"gcfg": name, "kind": kind or type(default)}
    if json is not None:
        metadata["json"] = json
    if pointer:
        metadata["pointer"] = True
    return field(default=default, metadata=metadata)


def _section(name: str, factory: Any, *, json: str | None = None, item: Any = None) -> Any:
    metadata: dict[str, Any] = {"gcfg": name}
    if json is not None:
        metadata["json"] = json
    if item is not None:
        metadata["item"] = item
    return field(default_factory=factory, metadata=metadata)


@dataclass
class CPIGlobalConfig:
    """The vSphere cloud provider's global configuration."""

    insecure: bool = _prop("insecure-flag", False)
    round_tripper_count: int = _prop("soap-roundtrip-count", 0)
    username: str = _prop("user", "")
    password: str = _prop("password", "")
    secret_name: str = _prop("secret-name", "")
    secret_namespace: str = _prop("secret-namespace", "")
    port: str = _prop("port", "")
    ca_file: str = _prop("ca-file", "")
    thumbprint: str = _prop("thumbprint", "")
    datacenters: str = _prop("datacenters", "")
    service_account: str = _prop("service-account", "")
    secrets_directory: str = _prop("secrets-directory", "")
    api_disable: bool | None = _prop("api-disable", None, kind=bool, pointer=True)
    api_bind_port: str = _prop("api-binding", "")
    cluster_id: str = _prop("cluster-id", "")


@dataclass
class CPIVCenterConfig:
    """A vSphere cloud provider's vCenter configuration."""

    username: str = _prop("user", "")
    password: str = _prop("password", "")
    port: str = _prop("port", "")
    datacenters: str = _prop("datacenters", "")
    round_tripper_count: int = _prop("soap-roundtrip-count", 0)
    thumbprint: str = _prop("thumbprint", "")


@dataclass
class CPINetworkConfig:
    """The network configuration for the vSphere cloud provider."""

    name: str = _prop("public-network", "")


@dataclass
class CPIDiskConfig:
    """The disk configuration for the vSphere cloud provider."""

    scsi_controller_type: str = _prop("scsicontrollertype", "")


@dataclass
class CPIWorkspaceConfig:
    """The workspace configuration for the vSphere cloud provider."""

    server: str = _prop("server", "")
    datacenter: str = _prop("datacenter", "")
    folder: str = _prop("folder", "")
    datastore: str = _prop("default-datastore", "")
    resource_pool: str = _prop("resourcepool-path", "")


@dataclass
class CPILabelConfig:
    """The categories and tags that correspond to the zone and region node labels."""

    zone: str = _prop("zone", "")
    region: str = _prop("region", "")


@dataclass
class CPICloudConfig:
    """Settings of the external cloud controller manager."""

    controller_image: str = ""
    extra_args: dict[str, str] = field(default_factory=dict)

    def marshal_cloud_provider_args(self) -> list[str]:
        """Return the command-line arguments for the cloud provider's pod spec."""
        args = [
            "--v=2",
            "--cloud-provider=vsphere",
            "--cloud-config=/etc/cloud/vsphere.conf",
        ]
        args.extend(f"--{key}={value}" for key, value in self.extra_args.items())
        return args


@dataclass
class CPIStorageConfig:
    """Images used by the vSphere container storage interface."""

    controller_image: str = ""
    node_driver_image: str = ""
    attacher_image: str = ""
    provisioner_image: str = ""
    metadata_syncer_image: str = ""
    liveness_probe_image: str = ""
    registrar_image: str = ""


@dataclass
class CPIProviderConfig:
    """Extra information used to configure the external vSphere cloud provider."""

    cloud: CPICloudConfig | None = None
    storage: CPIStorageConfig | None = None


@dataclass
class _SectionHeader:
    line: int
    name: str
    subsection: str | None


@dataclass
class _Assignment:
    line: int
    name: str
    value: str | None


def _read_value(text: str, lines: list[str], index: int, lineno: int) -> tuple[str, int]:
    out: list[str] = []
    pending = ""
    quoted = False
    started = False
    pos = 0
    while True:
        if pos >= len(text):
            if quoted:
                raise IniError(f"line {lineno}: unterminated quoted value")
            return "".join(out), index
        ch = text[pos]
        pos += 1
        if ch == "\\":
            if pos >= len(text):
                if index >= len(lines):
                    raise IniError(f"line {lineno}: line continuation at end of data")
                text = lines[index]
                index += 1
                pos = 0
                continue
            escaped = text[pos]
            pos += 1
            if escaped not in _VALUE_ESCAPES:
                raise IniError(f"line {lineno}: invalid escape sequence \\{escaped}")
            out.append(pending)
            pending = ""
            out.append(_VALUE_ESCAPES[escaped])
            started = True
            continue
        if quoted:
            if ch == '"':
                quoted = False
            else:
                out.append(ch)
            continue
        if ch == '"':
            out.append(pending)
            pending = ""
            quoted = True
            started = True
        elif ch in ";#":
            return "".join(out), index
        elif ch.isspace():
            if started:
                pending += ch
        else:
            out.append(pending)
            pending = ""
            out.append(ch)
            started = True


def _scan(text: str) -> Iterator[_SectionHeader | _Assignment]:
    lines = text.splitlines()
    index = 0
    while index < len(lines):
        lineno = index + 1
        stripped = lines[index].strip()
        index += 1
        if not stripped or stripped[0] in ";#":
            continue
        if stripped.startswith("["):
            match = _SECTION_RE.fullmatch(stripped)
            if match is None:
                raise IniError(f"line {lineno}: invalid section header")
            name, subsection = match.groups()
            if subsection is not None:
                subsection = re.sub(r"\\(.)", r"\1", subsection)
            yield _SectionHeader(lineno, name, subsection)
            continue
        match = _VARIABLE_RE.fullmatch(stripped)
        if match is None:
            raise IniError(f"line {lineno}: invalid variable name")
        name, rest = match.groups()
        if not rest or rest[0] in ";#":
            yield _Assignment(lineno, name, None)
        elif rest[0] == "=":
            value, index = _read_value(rest[1:], lines, index, lineno)
            yield _Assignment(lineno, name, value)
        else:
            raise IniError(f"line {lineno}: expected '=' after variable {name!r}")


def _convert(kind: type, assignment: _Assignment) -> Any:
    value = assignment.value
    where = f"line {assignment.line}: variable {assignment.name!r}"
    if value is None:
        if kind is bool:
            return True
        raise IniError(f"{where}: missing value")
    if kind is bool:
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        raise IniError(f"{where}: invalid boolean {value!r}")
    if kind is int:
        text = value.strip()
        if not re.fullmatch(r"[+-]?[0-9]+", text):
            raise IniError(f"{where}: invalid integer {value!r}")
        number = int(text)
        if not _INT32_MIN <= number <= _INT32_MAX:
            raise IniError(f"{where}: integer {value!r} out of range")
        return number
    return value


def _assign(target: Any, assignment: _Assignment, warnings: list[str]) -> None:
    properties = {
        f.metadata["gcfg"].lower(): f for f in fields(target) if "gcfg" in f.metadata
    }
    spec = properties.get(assignment.name.lower())
    if spec is None:
        warnings.append(
            f"line {assignment.line}: invalid variable: {assignment.name!r} not found"
        )
        return
    setattr(target, spec.name, _convert(spec.metadata["kind"], assignment))


def _format_property(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    raw = value.value if isinstance(value, Enum) else value
    text = _INI_ESCAPE_CHARS.sub(r"\\\1", str(raw)).replace("\t", "\\t")
    if isinstance(raw, str):
        return f'"{text}"'
    return text


def _marshal_section(name: str, section: Any) -> str:
    lines = [f"[{name}]"]
    for spec in fields(section):
        prop = spec.metadata.get("gcfg")
        if prop is None:
            continue
        value = getattr(section, spec.name)
        if is_empty(value):
            continue
        lines.append(f"{prop} = {_format_property(value)}")
    return "\n".join(lines) + "\n\n"


@dataclass
class CPIConfig:
    """The vSphere cloud provider's configuration."""

    global_: CPIGlobalConfig = _section("Global", CPIGlobalConfig, json="global")
    vcenter: dict[str, CPIVCenterConfig] = _section(
        "VirtualCenter", dict, json="virtualCenter", item=CPIVCenterConfig
    )
    network: CPINetworkConfig = _section("Network", CPINetworkConfig)
    disk: CPIDiskConfig = _section("Disk", CPIDiskConfig)
    workspace: CPIWorkspaceConfig = _section("Workspace", CPIWorkspaceConfig)
    labels: CPILabelConfig = _section("Labels", CPILabelConfig)
    provider_config: CPIProviderConfig = field(default_factory=CPIProviderConfig)

    def marshal_ini(self) -> str:
        """Encode the configuration as INI data, leaving out empty sections."""
        parts: list[str] = []
        for spec in fields(self):
            section = spec.metadata.get("gcfg")
            if section is None:
                continue
            value = getattr(self, spec.name)
            if is_empty(value):
                continue
            if isinstance(value, Mapping):
                for key in sorted(value, key=str):
                    parts.append(_marshal_section(f'{section} "{key}"', value[key]))
            else:
                parts.append(_marshal_section(section, value))
        return "".join(parts)

    @classmethod
    def from_ini(cls, data: str | bytes, *, warn_as_fatal: bool = False) -> CPIConfig:
        """Read a configuration from INI data.

        Unknown sections and variables are warnings: they are ignored unless
        ``warn_as_fatal`` is set, in which case IniError is raised.
        """
        text = bytes(data).decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
        config = cls()
        sections = {
            f.metadata["gcfg"].lower(): f for f in fields(cls) if "gcfg" in f.metadata
        }
        warnings: list[str] = []
        target: Any = None
        in_section = False
        for event in _scan(text):
            if isinstance(event, _SectionHeader):
                in_section = True
                spec = sections.get(event.name.lower())
                if spec is None:
                    warnings.append(
                        f"line {event.line}: invalid section: {event.name!r} not found"
                    )
                    target = None
                    continue
                current = getattr(config, spec.name)
                if isinstance(current, dict):
                    if event.subsection is None:
                        raise IniError(
                            f"line {event.line}: section {event.name!r} "
                            "requires a subsection"
                        )
                    target = current.setdefault(event.subsection, spec.metadata["item"]())
                else:
                    if event.subsection is not None:
                        raise IniError(
                            f"line {event.line}: section {event.name!r} "
                            "does not allow subsections"
                        )
                    target = current
                continue
            if not in_section:
                raise IniError(f"line {event.line}: variable outside of a section")
            if target is not None:
                _assign(target, event, warnings)
        if warnings and warn_as_fatal:
            raise IniError("; ".join(warnings), warnings)
        return config


def is_empty(obj: Any) -> bool:
    """Return True if ``obj`` is its empty value, or a dataclass whose fields all are."""
    if obj is None:
        return True
    if is_dataclass(obj) and not isinstance(obj, type):
        return all(is_empty(getattr(obj, f.name)) for f in fields(obj))
    if isinstance(obj, Enum):
        return is_empty(obj.value)
    if isinstance(obj, (bool, int, float)):
        return not obj
    if isinstance(obj, (str, bytes, list, tuple, set, frozenset, Mapping)):
        return len(obj) == 0
    raise TypeError(f"invalid kind: {type(obj).__name__}")


def is_not_empty(obj: Any) -> bool:
    """Return True when is_empty returns False."""
    return not is_empty(obj)