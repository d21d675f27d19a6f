from vsphere_infra.types import to_unstructured
from vsphere_infra.zones import (
    FailureDomain,
    FailureDomainHostGroup,
    FailureDomainType,
    Network,
    PlacementConstraint,
    Topology,
    VSphereDeploymentZone,
    VSphereDeploymentZoneList,
    VSphereDeploymentZoneSpec,
    VSphereDeploymentZoneStatus,
    VSphereFailureDomain,
    VSphereFailureDomainList,
    VSphereFailureDomainSpec,
)


def test_failure_domain_type_values():
    assert FailureDomainType.HOST_GROUP.value == "HostGroup"
    assert FailureDomainType.COMPUTE_CLUSTER.value == "ComputeCluster"
    assert FailureDomainType("Datacenter") is FailureDomainType.DATACENTER


def test_placement_constraint_network_key():
    constraint = PlacementConstraint(
        resource_pool="pool", network=[Network(network_name="vm-net", dhcp4=False)]
    )
    data = to_unstructured(constraint)
    assert data["resourcePool"] == "pool"
    assert data["Network"] == [{"networkName": "vm-net", "dhcp4": False}]
    assert "folder" not in data


def test_deployment_zone_unstructured():
    zone = VSphereDeploymentZone(
        spec=VSphereDeploymentZoneSpec(
            server="vc.example.com", failure_domain="fd-a", control_plane=False
        ),
        status=VSphereDeploymentZoneStatus(ready=True),
    )
    data = to_unstructured(zone)
    assert data["spec"]["server"] == "vc.example.com"
    assert data["spec"]["failureDomain"] == "fd-a"
    assert data["spec"]["controlPlane"] is False
    assert data["spec"]["placementConstraint"] == {}
    assert data["status"] == {"ready": True}


def test_deployment_zone_unset_pointers_are_omitted():
    data = to_unstructured(VSphereDeploymentZone())
    assert "controlPlane" not in data["spec"]
    assert "ready" not in data["status"]


def test_failure_domain_required_fields_kept():
    data = to_unstructured(FailureDomain())
    assert data == {"name": "", "type": None, "tagCategory": ""}


def test_failure_domain_spec_unstructured():
    spec = VSphereFailureDomainSpec(
        region=FailureDomain(
            name="region-a",
            type=FailureDomainType.DATACENTER,
            tag_category="k8s-region",
            auto_configure=True,
        ),
        zone=FailureDomain(
            name="zone-a", type=FailureDomainType.HOST_GROUP, tag_category="k8s-zone"
        ),
        topology=Topology(
            datacenter="dc0",
            compute_cluster="cluster0",
            host_group=FailureDomainHostGroup(name="hg0"),
        ),
    )
    data = to_unstructured(VSphereFailureDomain(spec=spec))["spec"]
    assert data["region"]["type"] == "Datacenter"
    assert data["region"]["autoConfigure"] is True
    assert data["zone"]["type"] == "HostGroup"
    assert "autoConfigure" not in data["zone"]
    assert data["topology"] == {
        "datacenter": "dc0",
        "computeCluster": "cluster0",
        "hostGroup": {"name": "hg0"},
    }


def test_topology_without_optional_parts():
    assert to_unstructured(Topology(datacenter="dc0")) == {"datacenter": "dc0"}


def test_lists_keep_empty_items():
    assert to_unstructured(VSphereDeploymentZoneList())["items"] == []
    assert to_unstructured(VSphereFailureDomainList())["items"] == []