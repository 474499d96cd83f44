"""Unit tests for the autocheck command line."""

import json

from click.testing import CliRunner

from autocheck.cli import cli, find_script_files

VALID_SCRIPT = '''\
@env "elixir", version: "1.7"
@required_files "lib/lab1.ex"
@grade 0.5

step "tests" do
  run "mix test"
end
'''

INVALID_SCRIPT = '''\
@env "elixr", version: "1.7"
@grade 2
'''


class TestCheck:
    """Tests for `autocheck check`."""

    def test_valid_script(self, script_dir):
        (script_dir / "autocheck.conf").write_text(VALID_SCRIPT)
        result = CliRunner().invoke(cli, ["check"])
        assert result.exit_code == 0
        assert "Image: elixir:1.7-alpine" in result.output
        assert "STEP: tests" in result.output
        assert "STATUS: ok" in result.output

    def test_invalid_script(self, script_dir):
        (script_dir / "lab.autocheck").write_text(INVALID_SCRIPT)
        result = CliRunner().invoke(cli, ["check"])
        assert result.exit_code == 1
        assert "COMPILE FAILED (2 errors)" in result.output
        assert "Line 1: environment is not defined: elixr. Did you mean elixir?" in result.output
        assert "Line 2: grade must be a value between 0 and 1." in result.output

    def test_syntax_error(self, script_dir):
        (script_dir / "autocheck.conf").write_text('step "x" do\n')
        result = CliRunner().invoke(cli, ["check"])
        assert result.exit_code == 1
        assert "missing terminator: end" in result.output

    def test_explicit_script(self, script_dir):
        (script_dir / "other.txt").write_text(VALID_SCRIPT)
        result = CliRunner().invoke(cli, ["check", "--script", "other.txt"])
        assert result.exit_code == 0

    def test_missing_script(self, script_dir):
        result = CliRunner().invoke(cli, ["check", "--script", "nope.conf"])
        assert result.exit_code == 1
        assert "Script file not found" in result.output

    def test_no_script(self, script_dir):
        result = CliRunner().invoke(cli, ["check"])
        assert result.exit_code == 1
        assert "No script file found" in result.output

    def test_multiple_scripts(self, script_dir):
        (script_dir / "a.autocheck").write_text(VALID_SCRIPT)
        (script_dir / "b.autocheck").write_text(VALID_SCRIPT)
        assert len(find_script_files()) == 2
        result = CliRunner().invoke(cli, ["check"])
        assert result.exit_code == 1
        assert "Multiple script files found" in result.output


class TestShow:
    """Tests for `autocheck show`."""

    def test_prints_json(self, script_dir):
        (script_dir / "autocheck.conf").write_text(VALID_SCRIPT)
        result = CliRunner().invoke(cli, ["show"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["image"] == "elixir:1.7-alpine"
        assert data["environment"] == "elixir"
        assert data["required_files"] == ["lib/lab1.ex"]
        assert data["grade"] == 0.5
        assert data["network_access"] is False
        assert data["steps"] == [{"name": "tests", "commands": [{"kind": "run", "args": ["mix test"]}]}]

    def test_errors(self, script_dir):
        (script_dir / "autocheck.conf").write_text(INVALID_SCRIPT)
        result = CliRunner().invoke(cli, ["show"])
        assert result.exit_code == 1
        assert "Line 1: environment is not defined: elixr. Did you mean elixir?" in result.output

    def test_syntax_error(self, script_dir):
        (script_dir / "autocheck.conf").write_text('step "x" do\n  run café\nend\n', encoding="utf-8")
        result = CliRunner().invoke(cli, ["show"])
        assert result.exit_code == 1
        assert "COMPILE FAILED (1 error)" in result.output
        assert "Line 2: unexpected token: é." in result.output

    def test_no_banner_before_json(self, script_dir):
        (script_dir / "autocheck.conf").write_text(VALID_SCRIPT)
        result = CliRunner().invoke(cli, ["--debug", "show"])
        assert result.exit_code == 0
        assert "COMPILE STARTED" not in result.output


def test_environments_command():
    result = CliRunner().invoke(cli, ["environments"])
    assert result.exit_code == 0
    assert "elixir" in result.output
    assert "create_project/1" in result.output
    assert "parameters: image:" in result.output
