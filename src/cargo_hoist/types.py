"""Core type definitions"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional


class Profile(Enum):
    """Cargo build profile, named after its output subdirectory"""

    RELEASE = "release"
    DEBUG = "debug"


# Release artifacts win over debug ones when both exist
PROFILE_ORDER = (Profile.RELEASE, Profile.DEBUG)

HoistMode = Enum("HoistMode", ["COPY", "PATH"])


@dataclass(frozen=True)
class RegistryEntry:
    """A registered binary and its last known location"""

    name: str
    path: Path


@dataclass
class Registry:
    """Persistent name to path mapping of registered binaries.

    One entry per name; inserting an existing name replaces its entry.
    """

    binaries: Dict[str, RegistryEntry] = field(default_factory=dict)

    def insert(self, entry: RegistryEntry) -> None:
        self.binaries[entry.name] = entry

    def get(self, name: str) -> Optional[RegistryEntry]:
        return self.binaries.get(name)

    def entries(self) -> List[RegistryEntry]:
        """Entries sorted by name."""
        return sorted(self.binaries.values(), key=lambda e: e.name)

    def to_mapping(self) -> Dict[str, str]:
        return {e.name: str(e.path) for e in self.entries()}

    @classmethod
    def from_mapping(cls, mapping: Dict[str, str]) -> "Registry":
        registry = cls()
        for name, path in mapping.items():
            registry.insert(RegistryEntry(name=name, path=Path(path)))
        return registry

    def __len__(self) -> int:
        return len(self.binaries)

    def __contains__(self, name: object) -> bool:
        return name in self.binaries


@dataclass(frozen=True)
class HoistResult:
    """Outcome of a hoist operation"""

    entry: RegistryEntry
    mode: HoistMode
    destination: Optional[Path] = None

    @property
    def path(self) -> Path:
        """Where the hoisted binary can be found."""
        return self.destination if self.destination is not None else self.entry.path
