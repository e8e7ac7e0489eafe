"""Registry operations: register, search, list, nuke and hoist.

Each operation loads the registry from the store, works on the in-memory
copy and saves it back only when it mutated something. Concurrent
invocations are not coordinated: two overlapping load/save windows can
lose one update (last writer wins).
"""
import shutil
from pathlib import Path
from typing import List, Optional

from cargo_hoist.binaries.resolver import PathResolver
from cargo_hoist.errors import HoistIOError, NotRegisteredError, StaleEntryError
from cargo_hoist.logging import get_logger
from cargo_hoist.registry.store import RegistryStore
from cargo_hoist.types import HoistMode, HoistResult, Registry, RegistryEntry

logger = get_logger(__name__)


class RegistryService:
    """User-facing registry verbs on top of a store and a resolver."""

    def __init__(
        self,
        store: RegistryStore,
        resolver: Optional[PathResolver] = None,
        cwd: Optional[Path] = None,
    ):
        self.store = store
        self.resolver = resolver or PathResolver()
        self._cwd = Path(cwd) if cwd is not None else None

    @property
    def cwd(self) -> Path:
        return self._cwd if self._cwd is not None else Path.cwd()

    def register(self, name: str, project_dir: Optional[Path] = None) -> RegistryEntry:
        """Resolve `name` under `project_dir` and record its path.

        Resolution happens before the registry is touched, so a missing
        binary leaves the registry file unchanged.
        """
        project_dir = Path(project_dir) if project_dir is not None else self.cwd
        path, profile = self.resolver.resolve_any(name, project_dir)

        registry = self.store.load()
        entry = RegistryEntry(name=name, path=path)
        registry.insert(entry)
        self.store.save(registry)

        logger.info("binary_registered", binary=name, path=str(path), profile=profile.value)
        return entry

    def register_all(self, project_dir: Optional[Path] = None) -> List[RegistryEntry]:
        """Register every binary built under `project_dir`."""
        project_dir = Path(project_dir) if project_dir is not None else self.cwd
        discovered = self.resolver.discover(project_dir)
        if not discovered:
            logger.warning("no_binaries_found", project=str(project_dir))
            return []

        registry = self.store.load()
        for entry in discovered:
            registry.insert(entry)
        self.store.save(registry)

        logger.info("binaries_registered", project=str(project_dir), count=len(discovered))
        return discovered

    def search(self, name: str) -> RegistryEntry:
        """Look up `name` without checking that its path still exists."""
        entry = self.store.load().get(name)
        if entry is None:
            raise NotRegisteredError(name)
        return entry

    def list_binaries(self) -> List[RegistryEntry]:
        return self.store.load().entries()

    def nuke(self) -> None:
        self.store.save(Registry())
        logger.info("registry_nuked", path=str(self.store.path))

    def hoist(
        self,
        name: str,
        mode: HoistMode = HoistMode.COPY,
        dest_dir: Optional[Path] = None,
    ) -> HoistResult:
        """Copy a registered binary into `dest_dir`, or expose its path."""
        entry = self.search(name)

        if not entry.path.is_file():
            logger.debug("stale_entry", binary=name, path=str(entry.path))
            raise StaleEntryError(name, entry.path)

        if mode == HoistMode.PATH:
            logger.debug("binary_path_emitted", binary=name, path=str(entry.path))
            return HoistResult(entry=entry, mode=mode)

        dest_dir = Path(dest_dir) if dest_dir is not None else self.cwd
        destination = dest_dir / entry.path.name
        try:
            shutil.copy2(entry.path, destination)
        except shutil.SameFileError:
            # Already in place
            logger.debug("binary_already_hoisted", binary=name, path=str(destination))
            return HoistResult(entry=entry, mode=mode, destination=destination)
        except OSError as e:
            raise HoistIOError(
                f"Failed to copy {entry.path} to {destination}: {e}", destination
            ) from e

        logger.info(
            "binary_hoisted",
            binary=name,
            source=str(entry.path),
            destination=str(destination),
        )
        return HoistResult(entry=entry, mode=mode, destination=destination)
