"""The build plan produced by detection and consumed by the Dockerfile generator."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any

_OPTIONAL_STRING_FIELDS = (
    "language_version",
    "framework",
    "framework_version",
    "package_manager",
    "package_manager_version",
    "install_command",
    "build_command",
    "start_command",
)


@dataclass
class Plan:
    """Detected build plan for an application."""

    provider: str = ""
    language: str = ""
    language_version: str = ""
    framework: str = ""
    framework_version: str = ""
    package_manager: str = ""
    package_manager_version: str = ""
    install_command: str = ""
    build_command: str = ""
    start_command: str = ""
    detected_files: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    build_env: dict[str, str] = field(default_factory=dict)
    env: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return the plan as a JSON-ready mapping, leaving out empty optional fields."""
        data: dict[str, Any] = {"provider": self.provider, "language": self.language}
        for name in _OPTIONAL_STRING_FIELDS:
            value = getattr(self, name)
            if value:
                data[name] = value
        if self.detected_files:
            data["detected_files"] = list(self.detected_files)
        for name in ("metadata", "build_env", "env"):
            mapping = getattr(self, name)
            if mapping:
                data[name] = {key: mapping[key] for key in sorted(mapping)}
        return data

    def to_json(self) -> str:
        """Return the plan as indented JSON."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Any) -> "Plan":
        """Build a plan from a decoded JSON document, rejecting wrongly typed fields."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError("plan must be a JSON object")
        kwargs: dict[str, Any] = {
            name: _string(data, name)
            for name in ("provider", "language", *_OPTIONAL_STRING_FIELDS)
        }
        kwargs["detected_files"] = _string_list(data, "detected_files")
        kwargs["metadata"] = _object(data, "metadata")
        kwargs["build_env"] = _string_map(data, "build_env")
        kwargs["env"] = _string_map(data, "env")
        return cls(**kwargs)


def load_plan(path: str | os.PathLike[str]) -> Plan:
    """Load a plan from a JSON file."""
    with open(path, "rb") as handle:
        raw = handle.read()
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise ValueError(f"failed to parse JSON: {exc}") from exc
    return Plan.from_dict(data)


def _string(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"plan field {key!r} must be a string")
    return value


def _string_list(data: dict[str, Any], key: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"plan field {key!r} must be an array")
    items = []
    for item in value:
        if item is None:
            items.append("")
        elif isinstance(item, str):
            items.append(item)
        else:
            raise ValueError(f"plan field {key!r} must hold strings")
    return items


def _object(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"plan field {key!r} must be an object")
    return dict(value)


def _string_map(data: dict[str, Any], key: str) -> dict[str, str]:
    result = {}
    for name, value in _object(data, key).items():
        if value is None:
            result[name] = ""
        elif isinstance(value, str):
            result[name] = value
        else:
            raise ValueError(f"plan field {key!r} must map names to strings")
    return result