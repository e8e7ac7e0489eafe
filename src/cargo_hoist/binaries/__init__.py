"""Binary discovery functionality."""
from cargo_hoist.binaries.platforms import (
    executable_name,
    binary_name_from_file,
    is_binary_artifact,
    is_executable,
)
from cargo_hoist.binaries.resolver import PathResolver

__all__ = [
    "executable_name",
    "binary_name_from_file",
    "is_binary_artifact",
    "is_executable",
    "PathResolver",
]
