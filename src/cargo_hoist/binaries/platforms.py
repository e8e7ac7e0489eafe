"""Platform detection and executable naming."""
import platform
import stat
from pathlib import Path
from typing import NamedTuple, Optional


class PlatformMapping(NamedTuple):
    """Platform-specific executable conventions."""
    executable_suffix: str
    needs_exec_bit: bool


PLATFORM_MAPPINGS = {
    "Linux": PlatformMapping(executable_suffix="", needs_exec_bit=True),
    "Darwin": PlatformMapping(executable_suffix="", needs_exec_bit=True),
    "Windows": PlatformMapping(executable_suffix=".exe", needs_exec_bit=False),
}

# Unknown unix-likes (BSDs etc.) follow the Linux conventions
DEFAULT_MAPPING = PLATFORM_MAPPINGS["Linux"]

# Files cargo leaves next to binaries that may carry an exec bit
NON_BINARY_SUFFIXES = {".d", ".rlib", ".so", ".dylib", ".dll", ".pdb", ".a", ".lib"}


def get_platform_mapping(system: Optional[str] = None) -> PlatformMapping:
    """Get executable conventions for a platform."""
    if system is None:
        system = platform.system()
    return PLATFORM_MAPPINGS.get(system, DEFAULT_MAPPING)


def executable_name(binary_name: str, system: Optional[str] = None) -> str:
    """File name cargo gives a binary on the given platform."""
    suffix = get_platform_mapping(system).executable_suffix
    if suffix and not binary_name.endswith(suffix):
        return f"{binary_name}{suffix}"
    return binary_name


def binary_name_from_file(path: Path, system: Optional[str] = None) -> str:
    """Inverse of `executable_name`: strip the platform suffix."""
    suffix = get_platform_mapping(system).executable_suffix
    if suffix and path.name.endswith(suffix):
        return path.name[: -len(suffix)]
    return path.name


def is_executable(path: Path, system: Optional[str] = None) -> bool:
    """Check that `path` is a regular file the platform would run."""
    try:
        st = path.stat()
    except OSError:
        return False
    if not stat.S_ISREG(st.st_mode):
        return False

    mapping = get_platform_mapping(system)
    if mapping.needs_exec_bit:
        return bool(st.st_mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH))
    return path.suffix.lower() == mapping.executable_suffix


def is_binary_artifact(path: Path, system: Optional[str] = None) -> bool:
    """Executable build output that is a program rather than a library."""
    if path.suffix.lower() in NON_BINARY_SUFFIXES:
        return False
    return is_executable(path, system)
