"""Resource types, validation rules and cloud provider configuration for vSphere infrastructure."""

__version__ = "0.4.0"

__all__ = ["cloudprovider", "cluster", "constants", "errors", "machine", "types", "vm", "zones"]