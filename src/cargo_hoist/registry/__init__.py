"""Binary registry persistence and operations."""
from cargo_hoist.registry.store import RegistryStore
from cargo_hoist.registry.service import RegistryService

__all__ = [
    "RegistryStore",
    "RegistryService",
]
