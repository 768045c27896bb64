"""Detecting which Node.js package manager a project uses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from coolpack.context import Context
from coolpack.node.package_json import PackageJSON


class PackageManager(str, Enum):
    NPM = "npm"
    YARN1 = "yarn"
    YARN_BERRY = "yarnberry"
    PNPM = "pnpm"
    BUN = "bun"


_INSTALL_COMMANDS = {
    PackageManager.PNPM: "pnpm install --frozen-lockfile",
    PackageManager.YARN_BERRY: "yarn install --immutable",
    PackageManager.YARN1: "yarn install --frozen-lockfile",
    PackageManager.BUN: "bun install --frozen-lockfile",
    PackageManager.NPM: "npm ci",
}

_RUN_COMMANDS = {
    PackageManager.PNPM: "pnpm",
    PackageManager.YARN_BERRY: "yarn",
    PackageManager.YARN1: "yarn",
    PackageManager.BUN: "bun run",
    PackageManager.NPM: "npm run",
}

_LOCK_FILES = {
    PackageManager.PNPM: "pnpm-lock.yaml",
    PackageManager.YARN_BERRY: "yarn.lock",
    PackageManager.YARN1: "yarn.lock",
    PackageManager.BUN: "bun.lockb",
    PackageManager.NPM: "package-lock.json",
}


@dataclass(frozen=True)
class PackageManagerInfo:
    """A detected package manager and, when known, its version."""

    name: PackageManager = PackageManager.NPM
    version: str = ""

    def install_command(self) -> str:
        return _INSTALL_COMMANDS[self.name]

    def run_command(self) -> str:
        """Return the prefix used to run a package.json script."""
        return _RUN_COMMANDS[self.name]

    def lock_file(self) -> str:
        return _LOCK_FILES[self.name]


def is_yarn_berry(version: str) -> bool:
    """Return whether a Yarn version string denotes Yarn 2 or later."""
    return bool(version) and "2" <= version[0] <= "9"


def detect_package_manager(ctx: Context, pkg: PackageJSON) -> PackageManagerInfo:
    """Detect the package manager from packageManager, lock files, then engines."""
    name, version = pkg.get_package_manager_info()
    if name == "yarn":
        kind = PackageManager.YARN_BERRY if is_yarn_berry(version) else PackageManager.YARN1
        return PackageManagerInfo(kind, version)
    if name in ("pnpm", "bun", "npm"):
        return PackageManagerInfo(PackageManager(name), version)

    if ctx.has_file("pnpm-lock.yaml"):
        return PackageManagerInfo(PackageManager.PNPM)
    if ctx.has_file("bun.lockb") or ctx.has_file("bun.lock"):
        return PackageManagerInfo(PackageManager.BUN)
    if ctx.has_file(".yarnrc.yml") or ctx.has_file(".yarnrc.yaml"):
        return PackageManagerInfo(PackageManager.YARN_BERRY)
    if ctx.has_file("yarn.lock"):
        return PackageManagerInfo(PackageManager.YARN1)
    if ctx.has_file("package-lock.json"):
        return PackageManagerInfo(PackageManager.NPM)

    if pkg.engines.pnpm:
        return PackageManagerInfo(PackageManager.PNPM)
    if pkg.engines.bun:
        return PackageManagerInfo(PackageManager.BUN)
    if pkg.engines.yarn:
        return PackageManagerInfo(PackageManager.YARN1)

    return PackageManagerInfo()