import json

import pytest
from typer.testing import CliRunner

from brewhook.cli.main import app
from brewhook.core.errors import EXIT_SYSTEM_ERROR, EXIT_USER_ERROR
from brewhook.core.hook import BrewHook

runner = CliRunner()


@pytest.fixture
def cli_backend(make_backend, monkeypatch):
    """Route every hook the CLI builds to one fake backend."""
    backend = make_backend(formulas=["git"], taps=["homebrew/core"])
    real_create = BrewHook.create.__func__

    async def create(cls, backend_=None, env=None):
        return await real_create(cls, backend=backend)

    monkeypatch.setattr(BrewHook, "create", classmethod(create))
    return backend


def test_check_claimed():
    result = runner.invoke(app, ["check", "brew:wget"])

    assert result.exit_code == 0
    assert "yes" in result.output


def test_check_not_claimed():
    result = runner.invoke(app, ["check", "^1.0.0"])

    assert result.exit_code == EXIT_USER_ERROR


def test_awaken_installs(cli_backend):
    result = runner.invoke(app, ["awaken", "wget", "brew:wget", "--json"])

    assert result.exit_code == 0
    assert cli_backend.ops("install") == [("install", "formula", "wget", ())]
    assert '"outcome": "installed"' in result.output


def test_awaken_already_installed(cli_backend):
    result = runner.invoke(app, ["awaken", "git", "brew:git", "--json"])

    assert result.exit_code == 0
    assert cli_backend.count("install") == 0
    assert '"outcome": "already_installed"' in result.output


def test_soul_lists_taps(cli_backend):
    result = runner.invoke(app, ["soul", "--json"])

    assert result.exit_code == 0
    assert "homebrew/core" in result.output


def test_harmonize_from_file(cli_backend, tmp_path):
    manifest = tmp_path / "package.json"
    manifest.write_text(json.dumps({"system": {"brew": {"formulas": {"jq": "*"}, "taps": ["foo/bar"]}}}))

    result = runner.invoke(app, ["harmonize", str(manifest)])

    assert result.exit_code == 0
    assert cli_backend.ops("install", "tap") == [
        ("install", "formula", "jq", ()),
        ("tap", "foo/bar"),
    ]


def test_harmonize_failure_sets_exit_code(cli_backend, tmp_path):
    cli_backend.install_codes["jq"] = 1
    manifest = tmp_path / "package.json"
    manifest.write_text(json.dumps({"system": {"brew": {"formulas": {"jq": "*"}}}}))

    result = runner.invoke(app, ["harmonize", str(manifest)])

    assert result.exit_code == EXIT_USER_ERROR


def test_harmonize_missing_file(cli_backend, tmp_path):
    result = runner.invoke(app, ["harmonize", str(tmp_path / "absent.json")])

    assert result.exit_code == EXIT_USER_ERROR
    assert cli_backend.count("install") == 0


def test_missing_brew_exits_with_system_error(tmp_path, monkeypatch):
    monkeypatch.setenv("BREWHOOK_BREW", str(tmp_path / "nope"))
    monkeypatch.setattr("brewhook.core.config.BREW_PROBE_PATHS", ())
    monkeypatch.setattr("brewhook.core.locator.shutil.which", lambda name: None)

    result = runner.invoke(app, ["soul"])

    assert result.exit_code == EXIT_SYSTEM_ERROR


def test_harmonize_non_object_manifest_is_user_error(cli_backend, tmp_path):
    manifest = tmp_path / "package.json"
    manifest.write_text(json.dumps(["jq"]))

    result = runner.invoke(app, ["harmonize", str(manifest)])

    assert result.exit_code == EXIT_USER_ERROR
    assert cli_backend.count("install") == 0


def test_harmonize_success_exits_zero_with_json(cli_backend, tmp_path):
    manifest = tmp_path / "package.json"
    manifest.write_text(json.dumps({"system": {"brew": {"formulas": {"git": "*"}}}}))

    result = runner.invoke(app, ["harmonize", str(manifest), "--json"])

    assert result.exit_code == 0
    assert '"ok": true' in result.output
