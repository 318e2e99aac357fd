"""Integration tests for the bbcode2html command line tool."""

import io
import json
import sys

import pytest

from bbcode2html.cli import (
    EXIT_FILE_ERROR,
    EXIT_INPUT_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    main,
)


@pytest.fixture
def post(tmp_path):
    """Write a small BBCode file and return its path."""
    path = tmp_path / "post.txt"
    path.write_text("[b]Hello[/b] [i]world[/i]", encoding="utf-8")
    return path


@pytest.mark.integration
@pytest.mark.cli
def test_file_to_stdout(post, capsys):
    """Test translating a file to standard output."""
    assert main([str(post), "--no-config"]) == EXIT_SUCCESS
    assert capsys.readouterr().out == "<b>Hello</b> <i>world</i>\n"


@pytest.mark.integration
@pytest.mark.cli
def test_file_to_file(post, tmp_path, capsys):
    """Test writing output to a file."""
    out = tmp_path / "post.html"
    assert main([str(post), "-o", str(out), "--no-config"]) == EXIT_SUCCESS
    assert out.read_text(encoding="utf-8") == "<b>Hello</b> <i>world</i>"
    assert capsys.readouterr().out == ""


@pytest.mark.integration
@pytest.mark.cli
def test_stdin(monkeypatch, capsys):
    """Test reading BBCode from a pipe."""
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO("[u]é[/u]".encode("utf-8")), encoding="utf-8"))
    assert main(["--no-config"]) == EXIT_SUCCESS
    assert capsys.readouterr().out == "<u>é</u>\n"


@pytest.mark.integration
@pytest.mark.cli
def test_rendering_flags(tmp_path, capsys):
    """Test renderer flags reach the output."""
    source = tmp_path / "in.txt"
    source.write_text("[url=http://x.org]a[/url]\nb", encoding="utf-8")
    args = [str(source), "--no-config", "--link-rel", "", "--line-break-tag", "<br/>"]
    assert main(args) == EXIT_SUCCESS
    assert capsys.readouterr().out == '<a href="http://x.org">a</a><br/>b\n'


@pytest.mark.integration
@pytest.mark.cli
def test_standalone(post, capsys):
    """Test the standalone page flags."""
    assert main([str(post), "--no-config", "--standalone", "--title", "Greeting", "--language", "fr"]) == EXIT_SUCCESS
    out = capsys.readouterr().out
    assert out.startswith("<!DOCTYPE html>")
    assert '<html lang="fr">' in out
    assert "<title>Greeting</title>" in out


@pytest.mark.integration
@pytest.mark.cli
def test_dump_ast(post, capsys):
    """Test printing the parse tree as JSON."""
    assert main([str(post), "--no-config", "--dump-ast"]) == EXIT_SUCCESS
    data = json.loads(capsys.readouterr().out)
    assert data["schema_version"] == 1
    assert data["node_type"] == "Document"
    assert [child["node_type"] for child in data["children"]] == ["Tag", "Text", "Tag"]


@pytest.mark.integration
@pytest.mark.cli
def test_config_file(post, tmp_path, capsys):
    """Test options from a config file."""
    config = tmp_path / "settings.toml"
    config.write_text("[renderer]\nstandalone = true\ntitle = \"From config\"\n", encoding="utf-8")
    assert main([str(post), "--config", str(config)]) == EXIT_SUCCESS
    assert "<title>From config</title>" in capsys.readouterr().out


@pytest.mark.integration
@pytest.mark.cli
def test_flags_override_config_file(tmp_path, capsys):
    """Test a flag beats the same option in a config file."""
    source = tmp_path / "in.txt"
    source.write_text("a\nb", encoding="utf-8")
    config = tmp_path / "settings.json"
    config.write_text('{"newline-mode": "preserve"}', encoding="utf-8")
    assert main([str(source), "--config", str(config), "--newline-mode", "br"]) == EXIT_SUCCESS
    assert capsys.readouterr().out == "a<br>b\n"


@pytest.mark.integration
@pytest.mark.cli
def test_config_from_environment(post, tmp_path, monkeypatch, capsys):
    """Test the config path environment variable."""
    config = tmp_path / "env.yaml"
    config.write_text("standalone: true\n", encoding="utf-8")
    monkeypatch.setenv("BBCODE2HTML_CONFIG", str(config))
    assert main([str(post)]) == EXIT_SUCCESS
    assert capsys.readouterr().out.startswith("<!DOCTYPE html>")


@pytest.mark.integration
@pytest.mark.cli
def test_bad_config_file(post, tmp_path, capsys):
    """Test a malformed config file is a validation error."""
    config = tmp_path / "bad.json"
    config.write_text("{", encoding="utf-8")
    assert main([str(post), "--config", str(config)]) == EXIT_VALIDATION_ERROR
    assert "Invalid JSON" in capsys.readouterr().err


@pytest.mark.integration
@pytest.mark.cli
def test_invalid_option_value(post, capsys):
    """Test an out-of-range option is a validation error."""
    assert main([str(post), "--no-config", "--max-depth", "0"]) == EXIT_VALIDATION_ERROR
    assert "max_depth" in capsys.readouterr().err


@pytest.mark.integration
@pytest.mark.cli
def test_missing_input_file(tmp_path, capsys):
    """Test a missing input file."""
    assert main([str(tmp_path / "missing.txt"), "--no-config"]) == EXIT_FILE_ERROR
    assert "Error:" in capsys.readouterr().err


@pytest.mark.integration
@pytest.mark.cli
def test_invalid_utf8(tmp_path, capsys):
    """Test undecodable input."""
    source = tmp_path / "latin1.txt"
    source.write_bytes(b"caf\xe9")
    assert main([str(source), "--no-config"]) == EXIT_INPUT_ERROR
    assert "UTF-8" in capsys.readouterr().err


@pytest.mark.integration
@pytest.mark.cli
def test_oversize_reject(post, capsys):
    """Test rejecting oversized input."""
    args = [str(post), "--no-config", "--max-input-size", "5", "--oversize-mode", "reject"]
    assert main(args) == EXIT_INPUT_ERROR
    assert "exceeds" in capsys.readouterr().err


@pytest.mark.integration
@pytest.mark.cli
def test_oversize_truncate(post, capsys):
    """Test truncating oversized input."""
    assert main([str(post), "--no-config", "--max-input-size", "8"]) == EXIT_SUCCESS
    captured = capsys.readouterr()
    assert captured.out == "<b>Hello</b>\n"
    assert "truncating" in captured.err


@pytest.mark.integration
@pytest.mark.cli
def test_verbose_logs_recoveries(tmp_path, capsys):
    """Test debug logging reports recovered markup."""
    source = tmp_path / "in.txt"
    source.write_text("x[/b][blink]", encoding="utf-8")
    assert main([str(source), "--no-config", "-v"]) == EXIT_SUCCESS
    captured = capsys.readouterr()
    assert captured.out == "x[blink]\n"
    assert "Recovered from malformed markup" in captured.err


@pytest.mark.integration
@pytest.mark.cli
def test_log_file(post, tmp_path):
    """Test log messages are written to --log-file."""
    log_file = tmp_path / "run.log"
    assert main([str(post), "--no-config", "--log-level", "INFO", "--log-file", str(log_file)]) == EXIT_SUCCESS
    assert "Logging to file" in log_file.read_text(encoding="utf-8")


@pytest.mark.integration
@pytest.mark.cli
def test_rich_flag_on_redirected_output(post, capsys):
    """Test --rich falls back to plain output when stdout is not a terminal."""
    pytest.importorskip("rich")
    assert main([str(post), "--no-config", "--rich"]) == EXIT_SUCCESS
    assert capsys.readouterr().out == "<b>Hello</b> <i>world</i>\n"


@pytest.mark.integration
@pytest.mark.cli
def test_version(capsys):
    """Test --version prints the package version."""
    from bbcode2html import __version__

    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0
    assert __version__ in capsys.readouterr().out
