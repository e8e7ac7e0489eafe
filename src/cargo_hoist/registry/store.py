"""Registry file persistence."""
import os
import stat
import sys
import tempfile
from pathlib import Path

import tomli_w

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from cargo_hoist.errors import CorruptRegistryError, HoistIOError
from cargo_hoist.logging import get_logger
from cargo_hoist.types import Registry

logger = get_logger(__name__)

HEADER = (
    "# cargo-hoist registry: binary name = last registered build path.\n"
    "# Safe to edit by hand; `cargo-hoist nuke` resets it.\n"
)


class RegistryStore:
    """Loads and saves the registry TOML file at a fixed location."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Registry:
        """Read the registry, returning an empty one if the file is absent."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("registry_missing", path=str(self.path))
            return Registry()
        except UnicodeDecodeError as e:
            raise CorruptRegistryError(self.path, f"not valid UTF-8 ({e.reason})") from e
        except OSError as e:
            raise HoistIOError(f"Failed to read registry {self.path}: {e}", self.path) from e

        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise CorruptRegistryError(self.path, str(e)) from e

        for name, value in data.items():
            if not isinstance(value, str):
                raise CorruptRegistryError(
                    self.path, f"entry {name!r} must be a path string"
                )
            if not Path(value).is_absolute():
                raise CorruptRegistryError(
                    self.path, f"entry {name!r} must be an absolute path, got {value!r}"
                )

        registry = Registry.from_mapping(data)
        logger.debug("registry_loaded", path=str(self.path), binaries=len(registry))
        return registry

    def file_mode(self) -> int:
        """Mode of the existing registry file, or 0666 masked by the umask."""
        try:
            return stat.S_IMODE(self.path.stat().st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask

    def save(self, registry: Registry) -> None:
        """Atomically replace the registry file with `registry`."""
        content = HEADER + tomli_w.dumps(registry.to_mapping())
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            mode = self.file_mode()
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise HoistIOError(f"Failed to write registry {self.path}: {e}", self.path) from e

        logger.debug("registry_saved", path=str(self.path), binaries=len(registry))
