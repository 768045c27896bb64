"""Applying command-line and environment overrides to a build plan.

For every setting the command-line value wins over the environment,
which wins over what detection found.
"""

from __future__ import annotations

import os
from typing import Iterable

from coolpack.plan import Plan

_TRUE_VALUES = ("true", "1")


def parse_env_vars(env_args: Iterable[str]) -> dict[str, str]:
    """Parse KEY=value arguments; a bare KEY takes its value from the environment if set."""
    result: dict[str, str] = {}
    for arg in env_args:
        key, sep, value = arg.partition("=")
        if sep:
            result[key] = value
        elif arg in os.environ:
            result[arg] = os.environ[arg]
    return result


def apply_command_overrides(plan: Plan, install_cmd: str, build_cmd: str, start_cmd: str) -> None:
    """Override install, build and start commands from arguments or COOLPACK_*_CMD."""
    plan.install_command = _choose(install_cmd, "COOLPACK_INSTALL_CMD", plan.install_command)
    plan.build_command = _choose(build_cmd, "COOLPACK_BUILD_CMD", plan.build_command)
    plan.start_command = _choose(start_cmd, "COOLPACK_START_CMD", plan.start_command)


def apply_static_server_setting(plan: Plan, static_server: str) -> None:
    """Record the static file server; the generator falls back to caddy when unset."""
    value = _choose(static_server, "COOLPACK_STATIC_SERVER", "")
    if value:
        plan.metadata["static_server"] = value


def apply_spa_setting(plan: Plan, spa: bool, no_spa: bool) -> None:
    """Turn SPA mode off or on; disabling takes priority over enabling."""
    if no_spa or os.environ.get("COOLPACK_NO_SPA", "") in _TRUE_VALUES:
        plan.metadata.pop("is_spa", None)
        return
    if spa or os.environ.get("COOLPACK_SPA", "") in _TRUE_VALUES:
        plan.metadata["is_spa"] = True


def apply_output_dir_setting(plan: Plan, output_dir: str) -> None:
    """Record an override for the static output directory."""
    value = _choose(output_dir, "COOLPACK_SPA_OUTPUT_DIR", "")
    if value:
        plan.metadata["output_dir_override"] = value


def apply_custom_packages(plan: Plan, packages: Iterable[str] | None) -> None:
    """Merge existing, command-line and COOLPACK_PACKAGES APT packages, without duplicates."""
    existing = plan.metadata.get("custom_packages")
    collected: list[str] = []
    if isinstance(existing, (list, tuple)):
        collected.extend(item for item in existing if isinstance(item, str))
    collected.extend(packages or ())
    env = os.environ.get("COOLPACK_PACKAGES", "")
    if env:
        collected.extend(name.strip() for name in env.split(",") if name.strip())
    if collected:
        plan.metadata["custom_packages"] = list(dict.fromkeys(collected))


def _choose(cli_value: str, env_name: str, current: str) -> str:
    if cli_value:
        return cli_value
    return os.environ.get(env_name, "") or current