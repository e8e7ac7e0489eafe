"""Tests for the command line interface."""
import pytest

from cargo_hoist import cli
from cargo_hoist.cli import build_parser, main
from cargo_hoist.errors import CORRUPT_REGISTRY, NOT_REGISTERED, STALE_ENTRY

from conftest import make_binary


@pytest.fixture(autouse=True)
def non_interactive(monkeypatch):
    monkeypatch.setattr(cli, "is_interactive", lambda: False)


def test_register_list_hoist_scenario(config, tmp_path, work_dir, monkeypatch, capsys):
    """Register foo, list it, hoist it into the current directory"""
    proj = tmp_path / "proj"
    built = make_binary(proj / "target" / "release" / "foo", b"foo binary")

    assert main(["register", "foo", "-d", str(proj)], config=config) == 0
    capsys.readouterr()

    assert main(["list"], config=config) == 0
    out = capsys.readouterr().out
    assert out.splitlines() == [f"foo: {built.resolve()}"]

    monkeypatch.chdir(work_dir)
    assert main(["hoist", "foo"], config=config) == 0
    assert (work_dir / "foo").read_bytes() == b"foo binary"
    assert "Successfully hoisted foo" in capsys.readouterr().out


def test_search_empty_registry(config, capsys):
    assert main(["search", "bar"], config=config) == NOT_REGISTERED
    assert "bar is not registered" in capsys.readouterr().err


def test_find_alias(config, project, capsys):
    main(["install", "binary1", "-d", str(project)], config=config)
    capsys.readouterr()

    assert main(["find", "binary1"], config=config) == 0
    assert capsys.readouterr().out.startswith("binary1: ")


def test_default_command_registers_cwd(config, project, monkeypatch, capsys):
    monkeypatch.chdir(project)

    assert main([], config=config) == 0
    out = capsys.readouterr().out
    assert "Registered binary1: " in out
    assert "Registered binary2: " in out


def test_register_nothing_found(config, tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)

    assert main(["register"], config=config) == 0
    assert "No binaries found" in capsys.readouterr().err


def test_register_unknown_binary(config, project, capsys):
    assert main(["register", "nope", "-d", str(project)], config=config) != 0
    assert "Binary nope not found" in capsys.readouterr().err


def test_hoist_path(config, project, work_dir, monkeypatch, capsys):
    main(["register", "binary2", "-d", str(project)], config=config)
    capsys.readouterr()
    monkeypatch.chdir(work_dir)

    assert main(["--quiet", "hoist", "binary2", "--path"], config=config) == 0
    out = capsys.readouterr().out.strip()
    assert out == str((project / "target" / "release" / "binary2").resolve())
    assert list(work_dir.iterdir()) == []


def test_hoist_stale(config, project, work_dir, monkeypatch, capsys):
    main(["register", "binary1", "-d", str(project)], config=config)
    (project / "target" / "release" / "binary1").unlink()
    monkeypatch.chdir(work_dir)

    assert main(["hoist", "binary1"], config=config) == STALE_ENTRY
    assert "no longer exists" in capsys.readouterr().err


def test_hoist_unregistered_without_prompt(config, work_dir, monkeypatch):
    monkeypatch.chdir(work_dir)

    assert main(["hoist", "ghost"], config=config) == NOT_REGISTERED
    assert list(work_dir.iterdir()) == []


def test_hoist_prompts_to_register(config, project, monkeypatch, capsys):
    """Interactive hoist offers to register an unknown binary from cwd"""
    monkeypatch.setattr(cli, "is_interactive", lambda: True)
    questions = []

    def answer_yes(question):
        questions.append(question)
        return True

    monkeypatch.setattr(cli, "confirm", answer_yes)
    monkeypatch.chdir(project)

    assert main(["hoist", "binary1"], config=config) == 0
    assert len(questions) == 1
    assert (project / "binary1").exists()
    assert main(["search", "binary1"], config=config) == 0


def test_hoist_prompt_declined(config, project, monkeypatch):
    monkeypatch.setattr(cli, "is_interactive", lambda: True)
    monkeypatch.setattr(cli, "confirm", lambda question: False)
    monkeypatch.chdir(project)

    assert main(["hoist", "binary1"], config=config) == NOT_REGISTERED
    assert not (project / "binary1").exists()


def test_nuke(config, project, capsys):
    main(["register", "-d", str(project)], config=config)

    assert main(["nuke"], config=config) == 0
    capsys.readouterr()
    assert main(["list"], config=config) == 0
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "No registered binaries" in captured.err


def test_quiet_suppresses_output(config, project, capsys):
    assert main(["-q", "register", "-d", str(project)], config=config) == 0
    assert main(["-q", "nuke"], config=config) == 0
    captured = capsys.readouterr()
    assert captured.out == ""


def test_corrupt_registry_exit_code(config, capsys):
    config.registry_path.parent.mkdir(parents=True)
    config.registry_path.write_text("[[[")

    assert main(["list"], config=config) == CORRUPT_REGISTRY
    assert "nuke" in capsys.readouterr().err

    assert main(["nuke"], config=config) == 0
    assert main(["list"], config=config) == 0


def test_hook_command(config, tmp_path, monkeypatch, capsys):
    home = tmp_path / "home"
    home.mkdir()
    (home / ".bashrc").write_text("# rc\n")
    monkeypatch.setenv("HOME", str(home))

    assert main(["hook"], config=config) == 0
    assert "Installed cargo hook" in capsys.readouterr().out
    assert main(["hook"], config=config) == 0
    assert "already installed" in capsys.readouterr().out


def test_parser_verbosity():
    args = build_parser().parse_args(["-vv", "list"])
    assert args.verbosity == 2
    assert args.command == "list"
    assert not args.quiet


def test_hoist_without_names_needs_a_terminal(config, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["hoist"], config=config)
    assert exc.value.code == 2
    assert "at least one BINARY" in capsys.readouterr().err


def test_hoist_picker(config, project, work_dir, monkeypatch, capsys):
    """Interactive hoist with no names offers the registered binaries"""
    main(["register", "-d", str(project)], config=config)
    capsys.readouterr()
    monkeypatch.setattr(cli, "is_interactive", lambda: True)
    monkeypatch.setattr("builtins.input", lambda prompt: "2")
    monkeypatch.chdir(work_dir)

    assert main(["hoist"], config=config) == 0
    out = capsys.readouterr().out
    assert "1) binary1: " in out
    assert "2) binary2: " in out
    assert [p.name for p in work_dir.iterdir()] == ["binary2"]


def test_hoist_picker_accepts_names(config, project, work_dir, monkeypatch):
    main(["register", "-d", str(project)], config=config)
    monkeypatch.setattr(cli, "is_interactive", lambda: True)
    monkeypatch.setattr("builtins.input", lambda prompt: "binary2, 1")
    monkeypatch.chdir(work_dir)

    assert main(["hoist"], config=config) == 0
    assert sorted(p.name for p in work_dir.iterdir()) == ["binary1", "binary2"]


def test_hoist_picker_empty_registry(config, work_dir, monkeypatch, capsys):
    monkeypatch.setattr(cli, "is_interactive", lambda: True)

    def no_prompt(prompt):
        raise AssertionError("nothing to pick from")

    monkeypatch.setattr("builtins.input", no_prompt)
    monkeypatch.chdir(work_dir)

    assert main(["hoist"], config=config) == 0
    assert "No registered binaries" in capsys.readouterr().err


def test_hoist_binaries_flag(config, project, work_dir, monkeypatch):
    """-b names merge with positional names, duplicates collapse"""
    main(["register", "-d", str(project)], config=config)
    monkeypatch.chdir(work_dir)

    args = build_parser().parse_args(["hoist", "binary1", "-b", "binary2", "binary1"])
    assert args.bins == ["binary1"]
    assert args.binaries == ["binary2", "binary1"]

    assert main(["hoist", "binary1", "-b", "binary2", "-b", "binary1"], config=config) == 0
    assert sorted(p.name for p in work_dir.iterdir()) == ["binary1", "binary2"]


def test_hoist_only_binaries_flag(config, project, work_dir, monkeypatch):
    main(["register", "-d", str(project)], config=config)
    monkeypatch.chdir(work_dir)

    assert main(["hoist", "--binaries", "binary2"], config=config) == 0
    assert [p.name for p in work_dir.iterdir()] == ["binary2"]


def test_hoist_from_build_directory(config, project, monkeypatch, capsys):
    """Hoisting where the binary was built succeeds without copying"""
    main(["register", "binary1", "-d", str(project)], config=config)
    release = project / "target" / "release"
    monkeypatch.chdir(release)

    assert main(["hoist", "binary1"], config=config) == 0
    assert (release / "binary1").read_bytes() == b"binary1 release"
    assert "Successfully hoisted binary1" in capsys.readouterr().out


def test_stale_hoist_reports_once(config, project, work_dir, monkeypatch, capsys):
    """At default verbosity the stale error is printed once, not logged too"""
    main(["register", "binary1", "-d", str(project)], config=config)
    (project / "target" / "release" / "binary1").unlink()
    monkeypatch.chdir(work_dir)
    capsys.readouterr()

    assert main(["hoist", "binary1"], config=config) == STALE_ENTRY
    err = capsys.readouterr().err
    assert err.count("no longer exists") == 1
    assert "stale_entry" not in err
