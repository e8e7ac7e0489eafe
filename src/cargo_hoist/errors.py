"""Error handling for cargo hoist."""
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

# Process exit codes per error kind
BINARY_NOT_FOUND = 2
NOT_REGISTERED = 3
STALE_ENTRY = 4
CORRUPT_REGISTRY = 5
IO_ERROR = 6


class HoistError(Exception):
    """Base error class for cargo hoist."""
    def __init__(
        self,
        message: str,
        code: int = IO_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.code = code
        self.details = details or {}


class BinaryNotFoundError(HoistError):
    """No built artifact found for a binary."""
    def __init__(self, binary_name: str, searched: Iterable[Path] = ()):
        searched = [str(p) for p in searched]
        message = f"Binary {binary_name} not found"
        if searched:
            message += f" (searched {', '.join(searched)})"
        super().__init__(
            message,
            code=BINARY_NOT_FOUND,
            details={"binary_name": binary_name, "searched": searched}
        )


class NotRegisteredError(HoistError):
    """No registry entry for a binary."""
    def __init__(self, binary_name: str):
        super().__init__(
            f"Binary {binary_name} is not registered",
            code=NOT_REGISTERED,
            details={"binary_name": binary_name}
        )


class StaleEntryError(HoistError):
    """Registered path no longer exists on disk."""
    def __init__(self, binary_name: str, path: Path):
        super().__init__(
            f"Registered binary {binary_name} no longer exists at {path}; "
            f"rebuild and register it again",
            code=STALE_ENTRY,
            details={"binary_name": binary_name, "path": str(path)}
        )


class CorruptRegistryError(HoistError):
    """Registry file could not be parsed."""
    def __init__(self, path: Path, reason: str):
        super().__init__(
            f"Registry file {path} is corrupt: {reason}. "
            f"Run `cargo-hoist nuke` to reset it",
            code=CORRUPT_REGISTRY,
            details={"path": str(path), "reason": reason}
        )


class HoistIOError(HoistError):
    """Filesystem read, write or copy failure."""
    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(
            message,
            code=IO_ERROR,
            details={"path": str(path) if path is not None else None}
        )
