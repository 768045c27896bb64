"""Known npm packages that need system libraries to build or run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from coolpack.node.package_json import PackageJSON


@dataclass(frozen=True)
class NativeDependency:
    """An npm package and the Debian packages it needs."""

    package: str
    apt_packages: tuple[str, ...]
    description: str


_BROWSER_LIBS = (
    "libnss3",
    "libatk1.0-0",
    "libatk-bridge2.0-0",
    "libcups2",
    "libdrm2",
    "libxkbcommon0",
    "libxcomposite1",
    "libxdamage1",
    "libxfixes3",
    "libxrandr2",
    "libgbm1",
    "libasound2",
    "libpango-1.0-0",
    "libcairo2",
)

_BUILD = ("build-essential",)
_BUILD_PY = ("build-essential", "python3")

NATIVE_DEPENDENCIES: tuple[NativeDependency, ...] = (
    NativeDependency("sharp", ("libvips-dev",), "Image processing library"),
    NativeDependency("@prisma/client", ("openssl",), "Database ORM"),
    NativeDependency("prisma", ("openssl",), "Database ORM CLI"),
    NativeDependency("puppeteer", ("chromium", *_BROWSER_LIBS), "Headless Chrome automation"),
    NativeDependency("playwright", _BROWSER_LIBS, "Browser automation"),
    NativeDependency(
        "canvas",
        ("libcairo2-dev", "libjpeg-dev", "libpango1.0-dev", "libgif-dev", "librsvg2-dev"),
        "Canvas rendering",
    ),
    NativeDependency("bcrypt", _BUILD_PY, "Password hashing"),
    NativeDependency("argon2", _BUILD, "Password hashing"),
    NativeDependency("sqlite3", _BUILD_PY, "SQLite database"),
    NativeDependency("better-sqlite3", _BUILD_PY, "SQLite database"),
    NativeDependency("node-gyp", _BUILD_PY, "Native addon build tool"),
    NativeDependency("cpu-features", _BUILD, "CPU feature detection"),
    NativeDependency("ssh2", _BUILD, "SSH client"),
    NativeDependency("libsql", _BUILD, "LibSQL database"),
    NativeDependency("@libsql/client", _BUILD, "LibSQL client"),
)


def detect_native_dependencies(pkg: PackageJSON) -> list[NativeDependency]:
    """Return the known native dependencies the project uses, in table order."""
    return [dep for dep in NATIVE_DEPENDENCIES if pkg.has_dependency(dep.package)]


def required_apt_packages(deps: Iterable[NativeDependency]) -> list[str]:
    """Return the APT packages the given dependencies need, first occurrence first."""
    return list(dict.fromkeys(pkg for dep in deps for pkg in dep.apt_packages))