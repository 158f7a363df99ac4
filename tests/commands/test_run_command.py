"""Tests for `mpkg run`."""

import sys

import pytest
from click.testing import CliRunner

from mpkg_cli.main import cli
from mpkg_cli.module_resolution import ManifestFinder


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def app(project, write_manifest):
    write_manifest(project, {"mpkgtest_runlib": "1.0.0"})
    pkg = project / "packages" / "mpkgtest_runlib"
    pkg.mkdir()
    (pkg / "__init__.py").write_text("def shout(s):\n    return s.upper()\n")
    script = project / "app.py"
    script.write_text("import sys\nimport mpkgtest_runlib\nprint(mpkgtest_runlib.shout(' '.join(sys.argv[1:])))\n")
    return script


def test_run_imports_declared_package(runner, app):
    result = runner.invoke(cli, ["run", str(app), "hello", "world"])

    assert result.exit_code == 0, result.output
    assert "HELLO WORLD" in result.output


def test_run_restores_interpreter_state(runner, app):
    argv = list(sys.argv)
    path = list(sys.path)

    runner.invoke(cli, ["run", str(app)])

    assert sys.argv == argv
    assert sys.path == path
    assert not any(isinstance(f, ManifestFinder) for f in sys.meta_path)


def test_run_missing_package(runner, project, write_manifest):
    write_manifest(project, {"mpkgtest_absent": "1.0.0"})
    script = project / "app.py"
    script.write_text("import mpkgtest_absent\n")

    result = runner.invoke(cli, ["run", str(script)])

    assert result.exit_code == 1
    assert "Package not found" in result.output


def test_run_missing_file(runner, project):
    result = runner.invoke(cli, ["run", "nope.py"])

    assert result.exit_code != 0


@pytest.fixture
def plain_app(project, write_manifest):
    write_manifest(project, {"mpkgtest_mainlib": "1.0.0"})
    pkg = project / "packages" / "mpkgtest_mainlib"
    pkg.mkdir()
    (pkg / "main.py").write_text("VALUE = 'from main.py'\n")
    script = project / "app.py"
    script.write_text("import mpkgtest_mainlib\nprint(mpkgtest_mainlib.VALUE)\n")
    return script


def test_run_uses_default_entry_from_env(runner, plain_app, monkeypatch):
    monkeypatch.setenv("MPKG_DEFAULT_ENTRY", "main.py")

    result = runner.invoke(cli, ["run", str(plain_app)])

    assert result.exit_code == 0, result.output
    assert "from main.py" in result.output


def test_run_uses_default_entry_from_settings_file(runner, plain_app, project):
    (project / ".mpkg").mkdir()
    (project / ".mpkg" / "settings.yaml").write_text("resolver:\n  default_entry: main.py\n")

    result = runner.invoke(cli, ["run", str(plain_app)])

    assert result.exit_code == 0, result.output
    assert "from main.py" in result.output


def test_run_entry_option_overrides_settings(runner, app, monkeypatch):
    monkeypatch.setenv("MPKG_DEFAULT_ENTRY", "main.py")

    result = runner.invoke(cli, ["run", "--entry", "__init__.py", str(app), "hi"])

    assert result.exit_code == 0, result.output
    assert "HI" in result.output
