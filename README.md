# vsphere_infra

Resource types and admission rules for clusters whose machines run on
vSphere. The package also reads and writes the INI configuration of the
vSphere cloud provider.

## Modules

- `vsphere_infra.types` holds the shared specs, such as `VirtualMachineCloneSpec`,
  `NetworkSpec`, `NetworkDeviceSpec`, `NetworkRouteSpec`, `NetworkStatus` and
  `APIEndpoint`. It also holds the enums `CloneMode`, `VirtualMachineState` and
  `VirtualMachinePowerState`, and `to_unstructured`, which turns any resource
  into plain dicts and lists keyed by camel-cased wire names. Empty optional
  fields are left out of that output.
- `vsphere_infra.cluster` holds `VSphereCluster`, `VSphereClusterList`,
  `HAProxyLoadBalancer` and `HAProxyLoadBalancerList`.
- `vsphere_infra.machine` holds `VSphereMachine`, `VSphereMachineList`,
  `VSphereMachineTemplate` and `VSphereMachineTemplateList`.
- `vsphere_infra.vm` holds `VSphereVM` and `VSphereVMList`.
- `vsphere_infra.zones` holds `VSphereDeploymentZone`, `VSphereFailureDomain`,
  their specs, their lists and `FailureDomainType`.
- `vsphere_infra.cloudprovider` holds `CPIConfig` and its section classes,
  `IniError`, `is_empty` and `is_not_empty`.
- `vsphere_infra.errors` holds `FieldError`, `InvalidError`, `invalid`,
  `forbidden` and `aggregate_errors`.
- `vsphere_infra.constants` holds the condition types and reasons,
  `GroupVersion`, `GroupKind` and `GROUP_VERSION`
  (`infrastructure.cluster.x-k8s.io/v1alpha4`).

## Installing

```
pip install .
```

The package has no runtime dependencies. To run the tests, install the
`test` extra and run `pytest`.

## Validating resources

`VSphereCluster`, `VSphereMachine`, `VSphereMachineTemplate` and `VSphereVM`
each have `validate_create()`, `validate_update(old)` and `validate_delete()`.
A method returns `None` when the object is acceptable. When it is not, the
method raises `InvalidError`. The error's `errors` attribute lists every
`FieldError` that was found, and `group_kind` and `name` say which object
failed.

```python
from vsphere_infra.errors import InvalidError
from vsphere_infra.machine import VSphereMachine, VSphereMachineSpec
from vsphere_infra.types import NetworkDeviceSpec, NetworkSpec

machine = VSphereMachine(
    spec=VSphereMachineSpec(
        server="vcenter.example.com",
        network=NetworkSpec(devices=[NetworkDeviceSpec(ip_addrs=["192.168.0.3"])]),
    )
)

try:
    machine.validate_create()
except InvalidError as exc:
    for error in exc.errors:
        print(error)
```

This prints:

```
spec.network.devices[0].ipAddrs[0]: Invalid value: "192.168.0.3": ip addresses should be in the CIDR format
```

The rules are these:

- **Cluster.** A cluster may not set both `thumbprint` and `insecure=True`.
  Updates and deletions are always accepted.
- **Machine and VM, on creation.** Neither may set
  `network.preferred_api_server_cidr`. Every device address must be in CIDR
  form.
- **Machine, on update.** Only `provider_id` and the network devices may
  change.
- **VM, on update.** Only `bios_uuid`, `bootstrap_ref` and the network
  devices may change.
- **Machine template, on creation.** A template may not set
  `preferred_api_server_cidr`, `provider_id` or device addresses.
- **Machine template, on update.** A template's spec may not change at all.
  Note that a rejected template update raises a single `FieldError`, not an
  `InvalidError`.

## Cloud provider configuration

```python
from vsphere_infra.cloudprovider import CPIConfig, CPIGlobalConfig, CPIVCenterConfig

config = CPIConfig(
    global_=CPIGlobalConfig(insecure=True, port="443"),
    vcenter={"vcenter.example.com": CPIVCenterConfig(datacenters="dc0")},
)
text = config.marshal_ini()
again = CPIConfig.from_ini(text)
```

`marshal_ini` returns a string. It writes the sections in this order: Global,
VirtualCenter, Network, Disk, Workspace, Labels.

- Sections and properties that hold their empty value are left out.
- Each vCenter gets its own `[VirtualCenter "<server>"]` section, and these
  sections are sorted by server name.
- String values are quoted, with backslashes, quotes and tabs escaped.

`from_ini` accepts either a `str` or `bytes`. Section and key names are
matched without regard to case. Unknown sections and keys count as warnings
and are ignored. Pass `warn_as_fatal=True` to raise `IniError` on them
instead. Malformed input always raises `IniError`. Examples of malformed
input are bad syntax, a non-integer or out-of-range integer, a bad boolean,
and a VirtualCenter section without a server name.

`CPICloudConfig.marshal_cloud_provider_args()` returns the cloud controller
manager's command-line arguments. These are `--v=2`,
`--cloud-provider=vsphere` and `--cloud-config=/etc/cloud/vsphere.conf`,
followed by `--key=value` for each entry in `extra_args`.

`is_empty(obj)` is true for `None`, zero values, empty strings and empty
containers, and for dataclasses whose fields are all empty. It raises
`TypeError` for any other kind of object.

## What this package does not do

The package defines the resources and checks them in memory. It does not:

- talk to a Kubernetes API server;
- serve admission webhooks;
- store objects;
- reconcile anything against vSphere.

It has no command-line program.