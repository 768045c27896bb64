import json

import pytest

from coolpack.node.package_json import Engines, PackageJSON, parse_package_json


def _parse(doc):
    return parse_package_json(json.dumps(doc).encode())


def test_parse_full_document():
    pkg = _parse(
        {
            "name": "web",
            "version": "1.2.3",
            "main": "server.js",
            "type": "module",
            "scripts": {"build": "vite build", "start": "node server.js"},
            "dependencies": {"react": "^18.2.0"},
            "devDependencies": {"vite": "^5.0.0"},
            "engines": {"node": ">=20", "pnpm": "8"},
            "packageManager": "pnpm@8.15.0",
            "cacheDirectories": [".cache"],
        }
    )
    assert pkg.name == "web"
    assert pkg.version == "1.2.3"
    assert pkg.main == "server.js"
    assert pkg.type == "module"
    assert pkg.engines == Engines(node=">=20", pnpm="8")
    assert pkg.cache_directories == [".cache"]
    assert pkg.get_script("build") == "vite build"


def test_scripts_lookup():
    pkg = _parse({"scripts": {"build": "tsc"}})
    assert pkg.has_script("build")
    assert not pkg.has_script("start")
    assert pkg.get_script("start") == ""


def test_dependency_lookup_prefers_dependencies():
    pkg = _parse(
        {
            "dependencies": {"next": "14.0.0"},
            "devDependencies": {"next": "13.0.0", "typescript": "^5.3.0"},
        }
    )
    assert pkg.has_dependency("next")
    assert pkg.has_dependency("typescript")
    assert not pkg.has_dependency("express")
    assert pkg.get_dependency_version("next") == "14.0.0"
    assert pkg.get_dependency_version("typescript") == "^5.3.0"
    assert pkg.get_dependency_version("express") == ""


@pytest.mark.parametrize(
    "field, expected",
    [
        ("pnpm@8.0.0+sha256.abc", ("pnpm", "8.0.0")),
        ("yarn@4.1.0", ("yarn", "4.1.0")),
        ("bun", ("bun", "")),
        ("", ("", "")),
    ],
)
def test_package_manager_info(field, expected):
    assert PackageJSON(package_manager=field).get_package_manager_info() == expected


def test_workspaces_array():
    pkg = _parse({"workspaces": ["packages/*", "apps/*"]})
    assert pkg.workspaces == ["packages/*", "apps/*"]
    assert pkg.is_monorepo()


def test_workspaces_object():
    pkg = _parse({"workspaces": {"packages": ["libs/*"]}})
    assert pkg.workspaces == ["libs/*"]
    assert pkg.is_monorepo()


@pytest.mark.parametrize("value", ["packages/*", 5, {"nohoist": ["x"]}, [1, 2]])
def test_workspaces_other_shapes_are_empty(value):
    pkg = _parse({"workspaces": value})
    assert pkg.workspaces == []
    assert not pkg.is_monorepo()


def test_null_document_gives_empty_package():
    assert parse_package_json(b"null") == PackageJSON()


def test_invalid_json_raises():
    with pytest.raises(ValueError):
        parse_package_json(b"{")


@pytest.mark.parametrize(
    "doc",
    [
        {"name": 1},
        {"scripts": ["build"]},
        {"dependencies": {"react": 18}},
        {"engines": "node"},
        {"cacheDirectories": "dist"},
        [1],
    ],
)
def test_wrong_field_types_raise(doc):
    with pytest.raises(ValueError):
        _parse(doc)