import pytest

from vsphere_infra.constants import (
    GROUP_NAME,
    GROUP_VERSION,
    VERSION,
    GroupKind,
    GroupVersion,
)


def test_group_version_fields():
    gk = GROUP_VERSION.with_kind("VSphereVM")
    assert gk.group == "infrastructure.cluster.x-k8s.io"
    assert gk.kind == "VSphereVM"
    assert GROUP_VERSION == GroupVersion(
        group="infrastructure.cluster.x-k8s.io", version="v1alpha4"
    )


def test_group_version_str_joins_group_and_version():
    gv = GroupVersion(group=GROUP_NAME, version=VERSION)
    assert str(gv) == "infrastructure.cluster.x-k8s.io/v1alpha4"
    assert str(gv) == str(GROUP_VERSION)


def test_group_version_str_without_group_is_version():
    assert str(GroupVersion(group="", version="v1")) == "v1"


def test_with_kind_keeps_group():
    gk = GROUP_VERSION.with_kind("VSphereCluster")
    assert gk == GroupKind(group=GROUP_NAME, kind="VSphereCluster")


def test_group_kind_str_qualifies_kind():
    gk = GROUP_VERSION.with_kind("VSphereMachine")
    assert str(gk) == "VSphereMachine." + GROUP_NAME


@pytest.mark.parametrize("kind", ["Pod", "Node", ""])
def test_group_kind_str_without_group_is_kind(kind):
    assert str(GroupKind(group="", kind=kind)) == kind


def test_group_version_is_frozen():
    gv = GroupVersion(group="example.com", version="v1")
    with pytest.raises(AttributeError):
        gv.version = "v2"  # type: ignore[misc]
    assert str(gv) == "example.com/v1"