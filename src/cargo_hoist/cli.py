"""Command line interface."""
import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

from cargo_hoist import __version__
from cargo_hoist.binaries.resolver import PathResolver
from cargo_hoist.config import HoistConfig, load_config
from cargo_hoist.errors import HoistError, NotRegisteredError
from cargo_hoist.logging import configure_logging, get_logger
from cargo_hoist.registry.service import RegistryService
from cargo_hoist.registry.store import RegistryStore
from cargo_hoist.shell import install_hook
from cargo_hoist.types import HoistMode, RegistryEntry

logger = get_logger("cli")


class ColorCodes:
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    BOLD = "\033[1m"


def print_color(
    text: str,
    color: str,
    newline: bool = True,
    stream: Optional[TextIO] = None,
) -> None:
    """Print `text` in `color` when the stream is a terminal."""
    stream = stream or sys.stdout
    end = "\n" if newline else ""
    if stream.isatty():
        stream.write(f"{color}{text}{ColorCodes.RESET}{end}")
    else:
        stream.write(f"{text}{end}")
    stream.flush()


def print_entry(entry: RegistryEntry) -> None:
    print_color(f"{entry.name}: ", ColorCodes.BLUE, newline=False)
    print_color(str(entry.path), ColorCodes.CYAN)


def is_interactive() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def confirm(question: str) -> bool:
    """Ask a yes/no question on the terminal. Anything but yes is no."""
    try:
        answer = input(f"{question} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def dedup(names: Sequence[str]) -> List[str]:
    return list(dict.fromkeys(names))


def build_service(config: HoistConfig) -> RegistryService:
    return RegistryService(
        store=RegistryStore(config.registry_path),
        resolver=PathResolver(config.target_dir),
    )


def choose_binaries(entries: Sequence[RegistryEntry]) -> List[str]:
    """Let the user pick registered binaries by number or name."""
    for index, entry in enumerate(entries, start=1):
        print_color(f"{index:>3}) ", ColorCodes.BOLD, newline=False)
        print_entry(entry)
    try:
        answer = input("Which binaries would you like to hoist? (numbers or names) ")
    except EOFError:
        return []

    chosen = []
    for token in answer.replace(",", " ").split():
        if token.isdigit() and 1 <= int(token) <= len(entries):
            chosen.append(entries[int(token) - 1].name)
        else:
            chosen.append(token)
    return dedup(chosen)


def cmd_hoist(service: RegistryService, args: argparse.Namespace, config: HoistConfig) -> None:
    mode = HoistMode.PATH if args.path else HoistMode.COPY
    names = dedup((args.bins or []) + (args.binaries or []))
    if not names:
        entries = service.list_binaries()
        if not entries:
            print_color("No registered binaries", ColorCodes.YELLOW, stream=sys.stderr)
            return
        names = choose_binaries(entries)

    for name in names:
        try:
            result = service.hoist(name, mode)
        except NotRegisteredError:
            if args.quiet or not is_interactive():
                raise
            if not confirm(f"{name} is not registered. Register it from {service.cwd} now?"):
                raise
            service.register(name, service.cwd)
            result = service.hoist(name, mode)

        if mode == HoistMode.PATH:
            print(result.path)
        elif not args.quiet:
            print_color("Successfully hoisted ", ColorCodes.GREEN, newline=False)
            print_color(name, ColorCodes.MAGENTA)


def cmd_list(service: RegistryService, args: argparse.Namespace, config: HoistConfig) -> None:
    entries = service.list_binaries()
    if not entries and not args.quiet:
        print_color("No registered binaries", ColorCodes.YELLOW, stream=sys.stderr)
    for entry in entries:
        print_entry(entry)


def cmd_search(service: RegistryService, args: argparse.Namespace, config: HoistConfig) -> None:
    print_entry(service.search(args.binary))


def cmd_nuke(service: RegistryService, args: argparse.Namespace, config: HoistConfig) -> None:
    service.nuke()
    if not args.quiet:
        print_color("Registry nuked", ColorCodes.YELLOW)


def cmd_register(service: RegistryService, args: argparse.Namespace, config: HoistConfig) -> None:
    project_dir = getattr(args, "project_dir", None)
    names = dedup(getattr(args, "binaries", None) or [])
    if names:
        entries = [service.register(name, project_dir) for name in names]
    else:
        entries = service.register_all(project_dir)

    if args.quiet:
        return
    if not entries:
        print_color("No binaries found in the target directory", ColorCodes.YELLOW, stream=sys.stderr)
    for entry in entries:
        print_color("Registered ", ColorCodes.GREEN, newline=False)
        print_entry(entry)


def cmd_hook(service: RegistryService, args: argparse.Namespace, config: HoistConfig) -> None:
    if is_interactive() and not args.quiet:
        if not confirm("Install the cargo hook into your shell config?"):
            logger.info("hook_install_declined")
            return
    installed = install_hook(config)
    if args.quiet:
        return
    if installed:
        print_color("Installed cargo hook", ColorCodes.GREEN)
    else:
        print_color("Cargo hook already installed", ColorCodes.YELLOW)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cargo-hoist",
        description="Dead simple, memoized hoisting of cargo-built binaries into scope.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v", "--verbosity", action="count", default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true",
        help="Only print errors and requested output",
    )
    parser.set_defaults(func=cmd_register, command=None)

    subparsers = parser.add_subparsers(dest="command")

    hoist = subparsers.add_parser("hoist", help="Copy registered binaries into the current directory")
    hoist.add_argument("bins", nargs="*", metavar="BINARY")
    hoist.add_argument(
        "-b", "--binaries", action="extend", nargs="+", default=[], metavar="BINARY",
        help="Binaries to hoist, in addition to the positional names",
    )
    hoist.add_argument(
        "--path", action="store_true",
        help="Print the registered path instead of copying the binary",
    )
    hoist.set_defaults(func=cmd_hoist)

    list_parser = subparsers.add_parser("list", help="List registered binaries")
    list_parser.set_defaults(func=cmd_list)

    search = subparsers.add_parser("search", aliases=["find"], help="Show where a binary is registered")
    search.add_argument("binary")
    search.set_defaults(func=cmd_search)

    nuke = subparsers.add_parser("nuke", help="Remove every registered binary")
    nuke.set_defaults(func=cmd_nuke)

    register = subparsers.add_parser(
        "register", aliases=["install"],
        help="Register binaries built in a cargo project (all of them by default)",
    )
    register.add_argument("binaries", nargs="*", metavar="BINARY")
    register.add_argument(
        "-d", "--project-dir", type=Path, default=None,
        help="Cargo project directory (defaults to the current directory)",
    )
    register.set_defaults(func=cmd_register)

    hook = subparsers.add_parser("hook", help="Install a shell hook that registers binaries on every cargo call")
    hook.set_defaults(func=cmd_hook)

    return parser


def main(argv: Optional[Sequence[str]] = None, config: Optional[HoistConfig] = None) -> int:
    """Run one command and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "hoist" and not (args.bins or args.binaries) and not is_interactive():
        parser.error("hoist needs at least one BINARY when not run from a terminal")
    configure_logging(args.verbosity, args.quiet)

    config = config or load_config()
    service = build_service(config)
    logger.debug("command_start", command=args.command, registry=str(config.registry_path))

    try:
        args.func(service, args, config)
    except HoistError as e:
        logger.debug("command_failed", command=args.command, code=e.code, details=e.details)
        print_color(f"error: {e}", ColorCodes.RED, stream=sys.stderr)
        return e.code
    return 0


def run() -> None:
    sys.exit(main())
