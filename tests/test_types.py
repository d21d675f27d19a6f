import pytest

from vsphere_infra.types import (
    APIEndpoint,
    CloneMode,
    ListMeta,
    NetworkDeviceSpec,
    NetworkRouteSpec,
    NetworkSpec,
    NetworkStatus,
    ObjectReference,
    SSHUser,
    VirtualMachine,
    VirtualMachineCloneSpec,
    VirtualMachineState,
    to_unstructured,
)


@pytest.mark.parametrize(
    "host, port, expected",
    [("", 6443, True), ("10.0.0.1", 0, True), ("", 0, True), ("10.0.0.1", 6443, False)],
)
def test_api_endpoint_is_zero(host, port, expected):
    assert APIEndpoint(host, port).is_zero() is expected


def test_api_endpoint_str():
    assert str(APIEndpoint("10.0.0.1", 6443)) == "10.0.0.1:6443"


def test_route_keeps_zero_metric():
    route = NetworkRouteSpec(to="10.0.0.0/8", via="10.0.0.1", metric=0)
    assert to_unstructured(route) == {"to": "10.0.0.0/8", "via": "10.0.0.1", "metric": 0}


def test_clone_spec_drops_empty_optional_fields():
    result = to_unstructured(VirtualMachineCloneSpec(template="ubuntu"))
    assert result == {"template": "ubuntu", "network": {"devices": []}}


def test_clone_spec_uses_wire_names():
    spec = VirtualMachineCloneSpec(
        template="t",
        num_cpus=2,
        memory_mib=4096,
        disk_gib=20,
        num_cores_per_socket=1,
        custom_vmx_keys={"guestinfo.a": "b"},
        storage_policy_name="gold",
    )
    result = to_unstructured(spec)
    assert result["numCPUs"] == 2
    assert result["memoryMiB"] == 4096
    assert result["diskGiB"] == 20
    assert result["numCoresPerSocket"] == 1
    assert result["customVMXKeys"] == {"guestinfo.a": "b"}
    assert result["storagePolicyName"] == "gold"


def test_clone_mode_serialises_to_value():
    spec = VirtualMachineCloneSpec(template="t", clone_mode=CloneMode.LINKED_CLONE)
    assert to_unstructured(spec)["cloneMode"] == "linkedClone"
    assert CloneMode("fullClone") is CloneMode.FULL_CLONE


def test_network_spec_preferred_cidr_name():
    spec = NetworkSpec(preferred_api_server_cidr="192.168.0.1/32")
    assert to_unstructured(spec)["preferredAPIServerCidr"] == "192.168.0.1/32"


def test_pointer_field_kept_when_zero():
    assert to_unstructured(NetworkDeviceSpec(network_name="vm", mtu=0))["mtu"] == 0
    assert "mtu" not in to_unstructured(NetworkDeviceSpec(network_name="vm"))


def test_device_spec_nested_routes_and_addresses():
    device = NetworkDeviceSpec(
        network_name="vm",
        ip_addrs=["192.168.0.1/32"],
        dhcp4=True,
        routes=[NetworkRouteSpec(to="a", via="b", metric=5)],
    )
    result = to_unstructured(device)
    assert result["networkName"] == "vm"
    assert result["ipAddrs"] == ["192.168.0.1/32"]
    assert result["dhcp4"] is True
    assert result["routes"] == [{"to": "a", "via": "b", "metric": 5}]
    assert "dhcp6" not in result


def test_virtual_machine_required_fields_present():
    vm = VirtualMachine(name="vm-1", state=VirtualMachineState.READY)
    result = to_unstructured(vm)
    assert result == {"name": "vm-1", "biosUUID": "", "state": "ready", "network": []}


def test_network_status_and_ssh_user():
    status = to_unstructured(NetworkStatus(mac_addr="00:00:5e:00:53:01"))
    assert status == {"macAddr": "00:00:5e:00:53:01"}
    user = to_unstructured(SSHUser(name="capv", authorized_keys=["ssh-ed25519 AAAA"]))
    assert user == {"name": "capv", "authorizedKeys": ["ssh-ed25519 AAAA"]}


def test_list_meta_continue_key():
    assert to_unstructured(ListMeta(continue_="abc")) == {"continue": "abc"}


def test_object_reference_api_version_key():
    ref = to_unstructured(ObjectReference(kind="KubeadmConfig", api_version="v1"))
    assert ref == {"kind": "KubeadmConfig", "apiVersion": "v1"}


def test_equal_objects_have_equal_unstructured_forms():
    first = VirtualMachineCloneSpec(server="foo.com", template="t")
    second = VirtualMachineCloneSpec(server="foo.com", template="t")
    third = VirtualMachineCloneSpec(server="bar.com", template="t")
    assert to_unstructured(first) == to_unstructured(second)
    assert to_unstructured(first) != to_unstructured(third)


def test_unstructured_result_is_independent_copy():
    spec = VirtualMachineCloneSpec(template="t", custom_vmx_keys={"k": "v"})
    result = to_unstructured(spec)
    del result["customVMXKeys"]["k"]
    assert spec.custom_vmx_keys == {"k": "v"}


def test_mappings_and_tuples_are_converted():
    result = to_unstructured({CloneMode.FULL_CLONE: (APIEndpoint("h", 1),)})
    assert result == {"fullClone": [{"host": "h", "port": 1}]}