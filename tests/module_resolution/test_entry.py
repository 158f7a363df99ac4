"""Tests for package entry-file resolution."""

from pathlib import Path

import pytest

from mpkg_cli.module_resolution import EntryNotFoundError
from mpkg_cli.module_resolution import InMemoryFileSystem
from mpkg_cli.module_resolution import ParseError
from mpkg_cli.module_resolution import resolve_package_entry

PKG = Path("/proj/packages/left-pad")


def test_main_from_descriptor():
    fs = InMemoryFileSystem(
        {
            PKG / "package.json": '{"main": "src/main.js"}',
            PKG / "src" / "main.js": "",
            PKG / "index.js": "",
        }
    )

    assert resolve_package_entry(PKG, fs) == PKG / "src" / "main.js"


def test_main_is_normalized():
    fs = InMemoryFileSystem(
        {
            PKG / "package.json": '{"main": "./lib/../dist/out.js"}',
            PKG / "dist" / "out.js": "",
        }
    )

    assert resolve_package_entry(PKG, fs) == PKG / "dist" / "out.js"


def test_missing_main_file_falls_back_to_index():
    fs = InMemoryFileSystem(
        {
            PKG / "package.json": '{"main": "gone.js"}',
            PKG / "index.js": "",
        }
    )

    assert resolve_package_entry(PKG, fs) == PKG / "index.js"


@pytest.mark.parametrize("descriptor", ['{"name": "left-pad"}', '{"main": ""}', '{"main": 3}', "[]"])
def test_descriptor_without_usable_main_falls_back(descriptor):
    fs = InMemoryFileSystem({PKG / "package.json": descriptor, PKG / "index.js": ""})

    assert resolve_package_entry(PKG, fs) == PKG / "index.js"


def test_no_descriptor_uses_index():
    fs = InMemoryFileSystem({PKG / "index.js": ""})

    assert resolve_package_entry(PKG, fs) == PKG / "index.js"


def test_custom_default_entry():
    fs = InMemoryFileSystem({PKG / "__init__.py": ""})

    assert resolve_package_entry(PKG, fs, default_entry="__init__.py") == PKG / "__init__.py"


def test_no_entry_raises():
    fs = InMemoryFileSystem({PKG / "README.md": ""})

    with pytest.raises(EntryNotFoundError) as exc_info:
        resolve_package_entry(PKG, fs)

    assert exc_info.value.directory == PKG
    assert str(PKG) in str(exc_info.value)


def test_main_is_not_searched_further():
    fs = InMemoryFileSystem({PKG / "package.json": '{"main": "lib"}', PKG / "lib" / "index.js": ""})

    # No index lookup inside the main path
    assert resolve_package_entry(PKG, fs) == PKG / "lib"


def test_absolute_main_stays_inside_package():
    fs = InMemoryFileSystem(
        {
            PKG / "package.json": '{"main": "/lib/index.js"}',
            PKG / "lib" / "index.js": "",
            Path("/lib/index.js"): "",
        }
    )

    assert resolve_package_entry(PKG, fs) == PKG / "lib" / "index.js"


def test_absolute_main_missing_in_package_falls_back():
    fs = InMemoryFileSystem(
        {
            PKG / "package.json": '{"main": "/lib/index.js"}',
            PKG / "index.js": "",
            Path("/lib/index.js"): "",
        }
    )

    assert resolve_package_entry(PKG, fs) == PKG / "index.js"


def test_descriptor_comments_are_not_allowed():
    fs = InMemoryFileSystem({PKG / "package.json": '{"main": "a.js" // no\n}', PKG / "a.js": ""})

    with pytest.raises(ParseError) as exc_info:
        resolve_package_entry(PKG, fs)

    assert exc_info.value.source == PKG / "package.json"


def test_real_filesystem(tmp_path):
    pkg = tmp_path / "left-pad"
    (pkg / "src").mkdir(parents=True)
    (pkg / "package.json").write_text('{"main": "src/main.js"}')
    (pkg / "src" / "main.js").write_text("module.exports = 1")

    assert resolve_package_entry(pkg) == pkg / "src" / "main.js"


def test_undecodable_descriptor_raises(tmp_path):
    pkg = tmp_path / "left-pad"
    pkg.mkdir()
    (pkg / "package.json").write_bytes(b'{"main": "\xff.js"}')
    (pkg / "index.js").write_text("")

    with pytest.raises(ParseError) as exc_info:
        resolve_package_entry(pkg)

    assert exc_info.value.source == pkg / "package.json"
    assert exc_info.value.position == 10
