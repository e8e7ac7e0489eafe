import pytest
from pathlib import Path

from cargo_hoist.binaries.resolver import PathResolver
from cargo_hoist.config import HoistConfig
from cargo_hoist.registry.service import RegistryService
from cargo_hoist.registry.store import RegistryStore


def make_binary(path: Path, content: bytes = b"\x7fELF fake binary", mode: int = 0o755) -> Path:
    """Create a fake build artifact"""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    path.chmod(mode)
    return path


@pytest.fixture
def project(tmp_path) -> Path:
    """Cargo project with two release binaries"""
    root = tmp_path / "project"
    release = root / "target" / "release"
    make_binary(release / "binary1", b"binary1 release")
    make_binary(release / "binary2", b"binary2 release")
    return root


@pytest.fixture
def work_dir(tmp_path) -> Path:
    """Empty directory binaries get hoisted into"""
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def config(tmp_path) -> HoistConfig:
    return HoistConfig(home_dir=tmp_path / "hoist", shell="/bin/bash")


@pytest.fixture
def store(config) -> RegistryStore:
    return RegistryStore(config.registry_path)


@pytest.fixture
def service(store, work_dir) -> RegistryService:
    return RegistryService(store, PathResolver(), cwd=work_dir)
