"""Locate cargo-built binaries under a project's build directory.

Every call checks the filesystem again; build artifacts change
independently of the registry.
"""
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from cargo_hoist.binaries.platforms import (
    binary_name_from_file,
    executable_name,
    is_binary_artifact,
    is_executable,
)
from cargo_hoist.errors import BinaryNotFoundError
from cargo_hoist.logging import get_logger
from cargo_hoist.types import PROFILE_ORDER, Profile, RegistryEntry

logger = get_logger(__name__)

DEFAULT_TARGET_DIR = "target"


class PathResolver:
    """Finds build artifacts for a binary in `<build dir>/<profile>/`."""

    def __init__(self, target_dir: Optional[Path] = None):
        # None means `<project>/target`; relative values resolve per project
        self.target_dir = Path(target_dir) if target_dir is not None else None

    def build_dir(self, project_dir: Path) -> Path:
        if self.target_dir is None:
            return Path(project_dir) / DEFAULT_TARGET_DIR
        return Path(project_dir) / self.target_dir

    def profile_dir(self, project_dir: Path, profile: Profile) -> Path:
        return self.build_dir(project_dir) / profile.value

    def candidate(self, binary_name: str, project_dir: Path, profile: Profile) -> Path:
        return self.profile_dir(project_dir, profile) / executable_name(binary_name)

    def resolve(self, binary_name: str, project_dir: Path, profile: Profile) -> Path:
        """Return the absolute path of `binary_name` built with `profile`."""
        candidate = self.candidate(binary_name, project_dir, profile)
        if not is_executable(candidate):
            logger.debug(
                "binary_not_in_profile",
                binary=binary_name,
                profile=profile.value,
                candidate=str(candidate),
            )
            raise BinaryNotFoundError(binary_name, [candidate])

        resolved = candidate.resolve()
        logger.debug("binary_resolved", binary=binary_name, path=str(resolved))
        return resolved

    def resolve_any(
        self,
        binary_name: str,
        project_dir: Path,
        profiles: Iterable[Profile] = PROFILE_ORDER,
    ) -> Tuple[Path, Profile]:
        """Try each profile in order and return the first hit."""
        searched = []
        for profile in profiles:
            try:
                return self.resolve(binary_name, project_dir, profile), profile
            except BinaryNotFoundError:
                searched.append(self.candidate(binary_name, project_dir, profile))
        raise BinaryNotFoundError(binary_name, searched)

    def discover(
        self,
        project_dir: Path,
        profiles: Iterable[Profile] = PROFILE_ORDER,
    ) -> List[RegistryEntry]:
        """List every executable built under the given profiles.

        A name found in several profiles is reported once, from the
        earliest profile.
        """
        found = {}
        for profile in profiles:
            directory = self.profile_dir(project_dir, profile)
            if not directory.is_dir():
                continue
            for item in sorted(directory.iterdir()):
                if not is_binary_artifact(item):
                    continue
                name = binary_name_from_file(item)
                if name in found:
                    continue
                found[name] = RegistryEntry(name=name, path=item.resolve())
                logger.debug(
                    "binary_discovered", binary=name, profile=profile.value, path=str(item)
                )

        logger.debug("discovery_complete", project=str(project_dir), binaries=len(found))
        return sorted(found.values(), key=lambda e: e.name)
