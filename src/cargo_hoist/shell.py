"""Shell hook that registers freshly built binaries on every cargo call."""

from enum import Enum
from pathlib import Path
from typing import Optional

from cargo_hoist.config import HoistConfig
from cargo_hoist.errors import HoistIOError
from cargo_hoist.logging import get_logger

logger = get_logger(__name__)

HOOK_FUNCTION = """
function cargo() {
    if command -v cargo-hoist &>/dev/null; then
      cargo-hoist --quiet register
    fi
    command cargo "$@"
}
"""


class ShellType(Enum):
    ZSH = "zsh"
    BASH = "bash"
    OTHER = "other"


def detect_shell(shell_path: str) -> ShellType:
    """Detect the user's shell from the SHELL variable. Defaults to bash."""
    if not shell_path:
        return ShellType.BASH
    if "zsh" in shell_path:
        return ShellType.ZSH
    if "bash" in shell_path:
        return ShellType.BASH
    return ShellType.OTHER


def shell_config_file(shell_type: ShellType, home: Path) -> Path:
    if shell_type == ShellType.ZSH:
        return home / ".zshrc"
    return home / ".bashrc"


def is_hook_installed(config: HoistConfig) -> bool:
    return config.hook_marker.exists()


def install_hook(config: HoistConfig, home: Optional[Path] = None) -> bool:
    """Append the cargo hook to the user's shell rc file once.

    Returns False when the hook was already installed.
    """
    if is_hook_installed(config):
        logger.debug("hook_already_installed", marker=str(config.hook_marker))
        return False

    home = Path(home) if home is not None else Path.home()
    rc_file = shell_config_file(detect_shell(config.shell), home)
    if not rc_file.exists():
        raise HoistIOError(f"Shell config file {rc_file} does not exist", rc_file)

    try:
        with open(rc_file, "a", encoding="utf-8") as f:
            f.write(HOOK_FUNCTION)
        config.hook_marker.parent.mkdir(parents=True, exist_ok=True)
        config.hook_marker.write_text("hook")
    except OSError as e:
        raise HoistIOError(f"Failed to install shell hook: {e}", rc_file) from e

    logger.info("hook_installed", rc_file=str(rc_file))
    return True
