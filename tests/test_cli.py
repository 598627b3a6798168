"""
Tests for CLI commands — detect, features, plan, run, yarn-version.

Commands that talk to yarn are exercised with a MockAdapter patched in
as the default shell adapter.
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from pmprofiler.adapters.mock import MockAdapter
from pmprofiler.core.services import shell_ops
from pmprofiler.main import cli


@pytest.fixture
def shell(monkeypatch: pytest.MonkeyPatch) -> MockAdapter:
    """Route every shell command through a MockAdapter reporting yarn 3."""
    mock = MockAdapter()
    mock.set_output("yarn --version", "3.6.4")
    monkeypatch.setattr(shell_ops, "ShellCommandAdapter", lambda: mock)
    for var in ("HTTP_PROXY", "HTTPS_PROXY", "NODE_EXTRA_CA_CERTS"):
        monkeypatch.delenv(var, raising=False)
    return mock


class TestCLIGlobal:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Package manager profiler" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestDetectCommand:
    def test_auto_detect_json(self, tmp_path: Path):
        (tmp_path / "package-lock.json").write_text('{"lockfileVersion": 3}')
        result = CliRunner().invoke(cli, ["--root", str(tmp_path), "detect", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"kind": "npm", "major_version": 8, "label": "npm8"}

    def test_explicit_lockfile(self, tmp_path: Path):
        lockfile = tmp_path / "pnpm-lock.yaml"
        lockfile.write_text("lockfileVersion: '5.3'\n")
        result = CliRunner().invoke(cli, ["detect", "--lockfile", str(lockfile)])
        assert result.exit_code == 0
        assert "pnpm 6" in result.output

    def test_explicit_kind(self, tmp_path: Path):
        lockfile = tmp_path / "lock.txt"
        lockfile.write_text("__metadata:\n  version: 6\n")
        result = CliRunner().invoke(cli, ["detect", "-l", str(lockfile), "--kind", "yarn"])
        assert result.exit_code == 0
        assert "yarn 3" in result.output

    def test_unknown_lockfile_name_needs_kind(self, tmp_path: Path):
        lockfile = tmp_path / "lock.txt"
        lockfile.write_text("")
        result = CliRunner().invoke(cli, ["detect", "-l", str(lockfile)])
        assert result.exit_code == 2

    def test_pnpm_without_header_fails(self, tmp_path: Path):
        (tmp_path / "pnpm-lock.yaml").write_text("importers: {}\n")
        result = CliRunner().invoke(cli, ["--root", str(tmp_path), "detect"])
        assert result.exit_code == 1
        assert "lockfileVersion" in result.output

    def test_no_lockfile(self, tmp_path: Path):
        result = CliRunner().invoke(cli, ["--root", str(tmp_path), "detect"])
        assert result.exit_code == 0
        assert "No lockfile found" in result.output


class TestYarnCommands:
    def test_yarn_version(self, tmp_path: Path, shell: MockAdapter):
        result = CliRunner().invoke(cli, ["--root", str(tmp_path), "yarn-version"])
        assert result.exit_code == 0
        assert result.output.strip() == "3"

    def test_features_json(self, tmp_path: Path, shell: MockAdapter):
        (tmp_path / ".pnp.cjs").write_text("")
        result = CliRunner().invoke(cli, ["--root", str(tmp_path), "features", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["zero_install"] is True
        assert data["skip_build"] is True
        assert data["disable_scripts"] is False
        assert data["args"] == ["--mode=skip-build"]

    def test_plan_does_not_apply(self, tmp_path: Path, shell: MockAdapter):
        result = CliRunner().invoke(cli, ["--root", str(tmp_path), "plan"])
        assert result.exit_code == 0
        assert "yarn config set enableScripts false" in result.output
        assert shell.commands == ["yarn --version"]

    def test_run(self, tmp_path: Path, shell: MockAdapter):
        shell.set_output("yarn up lodash", "Done")
        result = CliRunner().invoke(cli, ["--root", str(tmp_path), "run", "yarn up lodash"])
        assert result.exit_code == 0
        assert "Done" in result.output
        assert shell.commands[-1] == "yarn up lodash"
        assert "yarn config set enableImmutableInstalls false" in shell.commands

    def test_run_failure_exits_1(self, tmp_path: Path, shell: MockAdapter):
        shell.set_failure("yarn up nope", error="YN0082: No candidates found")
        result = CliRunner().invoke(cli, ["--root", str(tmp_path), "run", "yarn up nope", "yarn install"])
        assert result.exit_code == 1
        assert "YN0082" in result.output
        assert "yarn install" not in shell.commands

    def test_classic_yarn_features_fails(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        classic = MockAdapter()
        classic.set_output("yarn --version", "1.22.19")
        monkeypatch.setattr(shell_ops, "ShellCommandAdapter", lambda: classic)
        result = CliRunner().invoke(cli, ["--root", str(tmp_path), "features"])
        assert result.exit_code == 1
        assert "yarn1" in result.output
