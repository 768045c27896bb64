"""Reading the fields of package.json that detection relies on."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Engines:
    """The engines field of package.json."""

    node: str = ""
    npm: str = ""
    yarn: str = ""
    pnpm: str = ""
    bun: str = ""


@dataclass
class PackageJSON:
    """The parts of a package.json file used for detection."""

    name: str = ""
    version: str = ""
    main: str = ""
    type: str = ""
    scripts: dict[str, str] = field(default_factory=dict)
    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)
    engines: Engines = field(default_factory=Engines)
    package_manager: str = ""
    workspaces: list[str] = field(default_factory=list)
    cache_directories: list[str] = field(default_factory=list)

    def has_script(self, name: str) -> bool:
        return name in self.scripts

    def get_script(self, name: str) -> str:
        return self.scripts.get(name, "")

    def has_dependency(self, name: str) -> bool:
        """Return whether a package is in dependencies or devDependencies."""
        return name in self.dependencies or name in self.dev_dependencies

    def get_dependency_version(self, name: str) -> str:
        """Return a dependency's version range, preferring dependencies over devDependencies."""
        if name in self.dependencies:
            return self.dependencies[name]
        return self.dev_dependencies.get(name, "")

    def get_package_manager_info(self) -> tuple[str, str]:
        """Split the packageManager field (e.g. "pnpm@8.0.0+sha256.x") into name and version."""
        if not self.package_manager:
            return "", ""
        name, sep, rest = self.package_manager.partition("@")
        version = rest.split("+")[0] if sep else ""
        return name, version

    def is_monorepo(self) -> bool:
        return bool(self.workspaces)


def parse_package_json(data: bytes | str) -> PackageJSON:
    """Parse package.json content; raise ValueError on malformed JSON or field types."""
    doc = json.loads(data)
    if doc is None:
        return PackageJSON()
    if not isinstance(doc, dict):
        raise ValueError("package.json must be a JSON object")
    return PackageJSON(
        name=_string(doc, "name"),
        version=_string(doc, "version"),
        main=_string(doc, "main"),
        type=_string(doc, "type"),
        scripts=_string_map(doc, "scripts"),
        dependencies=_string_map(doc, "dependencies"),
        dev_dependencies=_string_map(doc, "devDependencies"),
        engines=_engines(doc.get("engines")),
        package_manager=_string(doc, "packageManager"),
        workspaces=_workspaces(doc.get("workspaces")),
        cache_directories=_string_list(doc, "cacheDirectories"),
    )


def _string(doc: dict[str, Any], key: str) -> str:
    value = doc.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"package.json field {key!r} must be a string")
    return value


def _string_map(doc: dict[str, Any], key: str) -> dict[str, str]:
    value = doc.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"package.json field {key!r} must be an object")
    result = {}
    for name, item in value.items():
        if item is None:
            result[name] = ""
        elif isinstance(item, str):
            result[name] = item
        else:
            raise ValueError(f"package.json field {key!r} must map names to strings")
    return result


def _string_list(doc: dict[str, Any], key: str) -> list[str]:
    value = doc.get(key)
    if value is None:
        return []
    items = _strings_or_none(value)
    if items is None:
        raise ValueError(f"package.json field {key!r} must be an array of strings")
    return items


def _strings_or_none(value: Any) -> list[str] | None:
    if not isinstance(value, list):
        return None
    items = []
    for item in value:
        if item is None:
            items.append("")
        elif isinstance(item, str):
            items.append(item)
        else:
            return None
    return items


def _engines(value: Any) -> Engines:
    if value is None:
        return Engines()
    if not isinstance(value, dict):
        raise ValueError("package.json field 'engines' must be an object")
    return Engines(**{name: _string(value, name) for name in ("node", "npm", "yarn", "pnpm", "bun")})


def _workspaces(value: Any) -> list[str]:
    # Either a list of globs or an object with a "packages" list; anything else means none.
    if isinstance(value, dict):
        value = value.get("packages")
        if value is None:
            return []
    return _strings_or_none(value) or []