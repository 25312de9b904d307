# tests/test_cli.py
import logging
import sys
import pytest
from pathlib import Path
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from codesum import cli
from codesum.cli import build_options, create_arg_parser, main
from codesum.config import LOGGER_NAME, VERSION

@pytest.fixture(autouse=True)
def reset_logging():
    """main() configures the base logger; drop its handler after each test."""
    yield
    base = logging.getLogger(LOGGER_NAME)
    for handler in list(base.handlers):
        base.removeHandler(handler)
    base.setLevel(logging.NOTSET)

@pytest.fixture
def project(tmp_path):
    src_dir = tmp_path / "src"
    src_dir.mkdir()
    (src_dir / "main.py").write_text("def hello():\n  print('hello')\n")
    (src_dir / "utils.py").write_text("# This is a utility\n")

    logs_dir = tmp_path / "logs"
    logs_dir.mkdir()
    (logs_dir / "app.log").write_text("ERROR: ...")

    (tmp_path / "README.md").write_text("# My Project\n")
    (tmp_path / ".gitignore").write_text("*.log\n")
    return tmp_path

# --- Test 1: Argument handling ---

def test_should_fail_when_no_arguments_are_provided(capsys):
    with patch.object(sys, "argv", ["codesum"]):
        with pytest.raises(SystemExit) as exc:
            main()
    assert exc.value.code != 0
    assert "path" in capsys.readouterr().err

def test_should_properly_print_help(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--help"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "codesum" in out
    assert "help" in out

def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert VERSION in capsys.readouterr().out

def test_build_options():
    args = create_arg_parser().parse_args(
        ["x", "--hidden", "--ignore-file", ".mergeignore", "-e", "*.lock", "-e", "dist/"]
    )
    options = build_options(args)
    assert options.hidden is True
    assert options.respect_ignore_files is True
    assert options.ignore_filenames[-1] == ".mergeignore"
    assert options.extra_patterns == ("*.lock", "dist/")

def test_max_workers_from_environment(monkeypatch):
    monkeypatch.setenv("CODESUM_MAX_WORKERS", "3")
    assert create_arg_parser().parse_args(["x"]).max_workers == 3

def test_negative_max_workers_rejected():
    with pytest.raises(SystemExit):
        main(["x", "-j", "-1"])

def test_unknown_log_level_rejected(project):
    with pytest.raises(SystemExit) as exc:
        main([str(project), "--log-level", "chatty"])
    assert exc.value.code == 2

# --- Test 2: End-to-end runs ---

@pytest.mark.parametrize("strategy", ["concurrent", "sequential"])
def test_end_to_end_run(project, capsys, strategy):
    with patch.object(sys, "argv", ["codesum", str(project), "--strategy", strategy]):
        main()

    out = capsys.readouterr().out
    assert "def hello():" in out
    assert "# This is a utility" in out
    assert "# My Project" in out
    assert "ERROR: ..." not in out

def test_unbounded_workers_and_excludes(project, capsys):
    main([str(project), "-j", "0", "--exclude", "src/utils.py"])

    out = capsys.readouterr().out
    assert "def hello():" in out
    assert "# This is a utility" not in out

def test_output_file(project, tmp_path_factory):
    output_file = tmp_path_factory.mktemp("out") / "context.txt"
    main([str(project), "-o", str(output_file)])

    content = output_file.read_text(encoding="utf-8")
    assert "# My Project" in content
    assert "ERROR: ..." not in content

def test_stats(project, capsys, monkeypatch):
    monkeypatch.setattr(cli.Tokenizer, "count", staticmethod(lambda text: 42))
    main([str(project), "--stats"])

    assert "Files: 3 | Tokens: 42" in capsys.readouterr().err

def test_missing_path_exits_with_diagnostic(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "nope")])
    assert exc.value.code == 1
    err = capsys.readouterr().err
    assert "Error" in err
    assert "nope" in err

def test_read_errors_are_logged_not_fatal(project, capsys, monkeypatch):
    monkeypatch.setattr(cli.Tokenizer, "count", staticmethod(lambda text: 0))
    (project / "blob.bin").write_bytes(b"\xff\xfe\x00")
    main([str(project), "--log-level", "error", "--stats"])

    captured = capsys.readouterr()
    assert "# My Project" in captured.out
    assert "Error reading file" in captured.err
    assert "Files: 4" in captured.err
