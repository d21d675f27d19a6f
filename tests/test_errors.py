import pytest

from vsphere_infra.constants import GROUP_VERSION, GroupKind
from vsphere_infra.errors import (
    FieldError,
    FieldErrorType,
    InvalidError,
    aggregate_errors,
    forbidden,
    invalid,
)

CLUSTER_KIND = GROUP_VERSION.with_kind("VSphereCluster")
THUMBPRINT_DETAIL = "cannot be set to true at the same time as .spec.Thumbprint"


def test_invalid_builds_dotted_path():
    err = invalid(("spec", "Insecure"), True, THUMBPRINT_DETAIL)
    assert err.type is FieldErrorType.INVALID
    assert err.field == "spec.Insecure"
    assert err.bad_value is True
    assert err.detail == THUMBPRINT_DETAIL


def test_invalid_message_with_bool_value():
    err = invalid(("spec", "Insecure"), True, THUMBPRINT_DETAIL)
    assert str(err) == "spec.Insecure: Invalid value: true: " + THUMBPRINT_DETAIL


def test_invalid_message_quotes_strings():
    path = ("spec", "network", "devices[0]", "ipAddrs[1]")
    err = invalid(path, "192.168.0.3", "ip addresses should be in the CIDR format")
    assert err.field == "spec.network.devices[0].ipAddrs[1]"
    assert '"192.168.0.3"' in str(err)
    assert str(err).startswith(err.field + ": ")
    assert str(err).endswith(": ip addresses should be in the CIDR format")


def test_invalid_message_with_missing_value():
    err = invalid("spec.x", None, "bad")
    assert "null" in str(err)


def test_forbidden_message_has_no_value():
    err = forbidden(("spec",), "cannot be modified")
    assert err.type is FieldErrorType.FORBIDDEN
    assert str(err) == "spec: Forbidden: cannot be modified"


def test_forbidden_accepts_string_path():
    assert forbidden("spec", "cannot be modified").field == "spec"


def test_field_error_can_be_raised():
    err = forbidden(("spec",), "VSphereMachineTemplateSpec is immutable")
    with pytest.raises(FieldError) as excinfo:
        raise err
    assert excinfo.value is err
    assert excinfo.value.detail == "VSphereMachineTemplateSpec is immutable"
    assert str(excinfo.value) == (
        "spec: Forbidden: VSphereMachineTemplateSpec is immutable"
    )


def test_aggregate_without_errors_returns_quietly():
    assert aggregate_errors(CLUSTER_KIND, "foo", []) is None


def test_aggregate_with_one_error_raises():
    err = invalid(("spec", "Insecure"), True, THUMBPRINT_DETAIL)
    with pytest.raises(InvalidError) as excinfo:
        aggregate_errors(CLUSTER_KIND, "foo", [err])
    raised = excinfo.value
    assert raised.errors == [err]
    assert raised.group_kind == CLUSTER_KIND
    assert raised.name == "foo"
    assert str(raised) == f'{CLUSTER_KIND} "foo" is invalid: {err}'


def test_aggregate_with_several_errors_lists_them():
    first = invalid("spec.a", "x", "bad")
    second = forbidden("spec.b", "no")
    with pytest.raises(InvalidError) as excinfo:
        aggregate_errors(CLUSTER_KIND, "foo", [first, second])
    message = str(excinfo.value)
    assert message.endswith(f"[{first}, {second}]")


def test_aggregate_deduplicates_identical_messages():
    first = forbidden("spec.devices.ipAddrs", "cannot be set in templates")
    second = forbidden("spec.devices.ipAddrs", "cannot be set in templates")
    with pytest.raises(InvalidError) as excinfo:
        aggregate_errors(CLUSTER_KIND, "foo", [first, second])
    message = str(excinfo.value)
    assert message.endswith(str(first))
    assert "[" not in message.split("is invalid: ", 1)[1]