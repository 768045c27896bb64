"""Presenting a build plan as text or writing it to a JSON file."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from coolpack.plan import Plan

_LABELS = (
    ("language_version", "Language Version"),
    ("framework", "Framework"),
    ("framework_version", "Framework Version"),
    ("package_manager", "Package Manager"),
    ("package_manager_version", "Package Manager Version"),
    ("install_command", "Install Command"),
    ("build_command", "Build Command"),
    ("start_command", "Start Command"),
)

_WIDTH = 25


def _line(label: str, value: str) -> str:
    return f"{label + ':':<{_WIDTH}}{value}\n"


def _display(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "<nil>"
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_display(item) for item in value) + "]"
    if isinstance(value, dict):
        return "map[" + " ".join(f"{key}:{_display(value[key])}" for key in sorted(value)) + "]"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_plan(plan: Plan) -> str:
    """Return a human-readable summary of the plan."""
    out = ["=== Coolpack Build Plan ===\n", "\n"]
    out.append(_line("Provider", plan.provider))
    out.append(_line("Language", plan.language))
    for attr, label in _LABELS:
        value = getattr(plan, attr)
        if value:
            out.append(_line(label, value))
    if plan.detected_files:
        out.append("\nDetected Files:\n")
        out.extend(f"  - {name}\n" for name in plan.detected_files)
    if plan.build_env:
        out.append("\nBuild Environment:\n")
        out.extend(f"  {key}={plan.build_env[key]}\n" for key in sorted(plan.build_env))
    if plan.metadata:
        out.append("\nMetadata:\n")
        out.extend(f"  {key}: {_display(plan.metadata[key])}\n" for key in sorted(plan.metadata))
    return "".join(out)


def write_plan(plan: Plan, path: str | os.PathLike[str]) -> Path:
    """Write the plan as indented JSON to a file and return its path."""
    target = Path(path)
    target.write_text(plan.to_json() + "\n", encoding="utf-8")
    return target