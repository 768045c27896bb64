"""Detecting the Node.js framework a project is built with."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

from coolpack.context import Context
from coolpack.node.config_parser import find_nested_property_value, find_property_value
from coolpack.node.package_json import PackageJSON
from coolpack.node.package_manager import PackageManagerInfo


class Framework(str, Enum):
    NONE = ""
    NEXTJS = "nextjs"
    REMIX = "remix"
    NUXT = "nuxt"
    ASTRO = "astro"
    VITE = "vite"
    CRA = "create-react-app"
    ANGULAR = "angular"
    SVELTEKIT = "sveltekit"
    SOLID_START = "solid-start"
    EXPRESS = "express"
    FASTIFY = "fastify"
    NESTJS = "nestjs"
    ADONISJS = "adonisjs"
    REACT_ROUTER = "react-router"
    TANSTACK = "tanstack-start"
    GATSBY = "gatsby"
    ELEVENTY = "eleventy"


class OutputType(str, Enum):
    """What a framework's build produces."""

    NONE = ""
    STATIC = "static"
    SERVER = "server"


_BUILD_FRAMEWORKS = frozenset(
    {
        Framework.NEXTJS,
        Framework.REMIX,
        Framework.NUXT,
        Framework.ASTRO,
        Framework.VITE,
        Framework.CRA,
        Framework.ANGULAR,
        Framework.SVELTEKIT,
        Framework.GATSBY,
    }
)

_RUN_START_FRAMEWORKS = frozenset(
    {
        Framework.NEXTJS,
        Framework.REMIX,
        Framework.NESTJS,
        Framework.EXPRESS,
        Framework.FASTIFY,
    }
)

_FIXED_START_COMMANDS = {
    Framework.NUXT: "node .output/server/index.mjs",
    Framework.ASTRO: "node ./dist/server/entry.mjs",
}

_SPA_INDICATORS = ("react", "vue", "svelte", "preact", "lit", "solid-js", "@builder.io/qwik")

_VERSION_CONSTRAINT_CHARS = "^~><="


@dataclass(frozen=True)
class FrameworkInfo:
    """A detected framework, its version and the kind of output it builds."""

    name: Framework = Framework.NONE
    version: str = ""
    output_type: OutputType = OutputType.NONE

    def default_build_command(self, pm: PackageManagerInfo) -> str:
        """Return the framework's usual build command, or "" if it has none."""
        if self.name in _BUILD_FRAMEWORKS:
            return pm.run_command() + " build"
        return ""

    def default_start_command(self, pm: PackageManagerInfo) -> str:
        """Return the framework's usual start command, or "" if it has none."""
        if self.name in _RUN_START_FRAMEWORKS:
            return pm.run_command() + " start"
        return _FIXED_START_COMMANDS.get(self.name, "")


def clean_version(v: str) -> str:
    """Strip leading range operators such as "^", "~" or ">=" from a version."""
    if v and v[0] in _VERSION_CONSTRAINT_CHARS:
        return v.lstrip(_VERSION_CONSTRAINT_CHARS + " ")
    return v


def is_spa_project(pkg: PackageJSON) -> bool:
    """Return whether the project depends on a client-side UI library."""
    return any(pkg.has_dependency(dep) for dep in _SPA_INDICATORS)


def _config_matches(
    ctx: Context,
    files: Iterable[str],
    lookup: Callable[[bytes], str],
    accept: Callable[[str], bool],
) -> bool:
    for name in files:
        if not ctx.has_file(name):
            continue
        try:
            data = ctx.read_file(name)
        except OSError:
            continue
        if accept(lookup(data)):
            return True
    return False


def _property(name: str) -> Callable[[bytes], str]:
    return lambda data: find_property_value(data, name)


def is_nextjs_static_export(ctx: Context) -> bool:
    """Return whether next.config.* sets output: 'export'."""
    return _config_matches(
        ctx,
        ("next.config.ts", "next.config.mjs", "next.config.js"),
        _property("output"),
        lambda value: value == "export",
    )


def is_astro_ssr_mode(ctx: Context) -> bool:
    """Return whether astro.config.* sets output to 'server' or 'hybrid'."""
    return _config_matches(
        ctx,
        ("astro.config.ts", "astro.config.mjs", "astro.config.js"),
        _property("output"),
        lambda value: value in ("server", "hybrid"),
    )


def is_nuxt_spa_mode(ctx: Context) -> bool:
    """Return whether nuxt.config.* sets ssr: false."""
    return _config_matches(
        ctx,
        ("nuxt.config.ts", "nuxt.config.js", "nuxt.config.mjs"),
        _property("ssr"),
        lambda value: value == "false",
    )


def is_react_router_spa_mode(ctx: Context) -> bool:
    """Return whether react-router.config.* sets ssr: false."""
    return _config_matches(
        ctx,
        ("react-router.config.ts", "react-router.config.js"),
        _property("ssr"),
        lambda value: value == "false",
    )


def is_solid_start_spa_mode(ctx: Context) -> bool:
    """Return whether app.config.* sets ssr: false."""
    return _config_matches(
        ctx,
        ("app.config.ts", "app.config.js"),
        _property("ssr"),
        lambda value: value == "false",
    )


def is_tanstack_start_static_mode(ctx: Context) -> bool:
    """Return whether app.config.* sets server.preset to 'static'."""
    return _config_matches(
        ctx,
        ("app.config.ts", "app.config.js"),
        lambda data: find_nested_property_value(data, "server", "preset"),
        lambda value: value == "static",
    )


def _output(condition: bool, when_true: OutputType, when_false: OutputType) -> OutputType:
    return when_true if condition else when_false


def detect_framework(ctx: Context, pkg: PackageJSON | None) -> FrameworkInfo:
    """Detect the framework, checking the most specific frameworks first."""
    if pkg is None:
        return FrameworkInfo()

    has = pkg.has_dependency

    def version(name: str) -> str:
        return clean_version(pkg.get_dependency_version(name))

    static, server = OutputType.STATIC, OutputType.SERVER

    if has("next"):
        return FrameworkInfo(
            Framework.NEXTJS, version("next"), _output(is_nextjs_static_export(ctx), static, server)
        )

    if has("@remix-run/react") or has("@remix-run/node"):
        return FrameworkInfo(Framework.REMIX, version("@remix-run/react"), server)

    if has("nuxt") or has("nuxt3"):
        return FrameworkInfo(
            Framework.NUXT, version("nuxt"), _output(is_nuxt_spa_mode(ctx), static, server)
        )

    if has("astro") or any(
        ctx.has_file(name) for name in ("astro.config.mjs", "astro.config.js", "astro.config.ts")
    ):
        return FrameworkInfo(
            Framework.ASTRO, version("astro"), _output(is_astro_ssr_mode(ctx), server, static)
        )

    if has("@sveltejs/kit"):
        return FrameworkInfo(
            Framework.SVELTEKIT,
            version("@sveltejs/kit"),
            _output(has("@sveltejs/adapter-static"), static, server),
        )

    if has("solid-start") or has("@solidjs/start"):
        raw = pkg.get_dependency_version("@solidjs/start") or pkg.get_dependency_version(
            "solid-start"
        )
        return FrameworkInfo(
            Framework.SOLID_START,
            clean_version(raw),
            _output(is_solid_start_spa_mode(ctx), static, server),
        )

    if has("@tanstack/start") or has("@tanstack/react-start"):
        return FrameworkInfo(
            Framework.TANSTACK,
            version("@tanstack/start"),
            _output(is_tanstack_start_static_mode(ctx), static, server),
        )

    # React Router v7 with a config file is the successor of Remix.
    if has("react-router") and (
        ctx.has_file("react-router.config.ts") or ctx.has_file("react-router.config.js")
    ):
        return FrameworkInfo(
            Framework.REMIX,
            version("react-router"),
            _output(is_react_router_spa_mode(ctx), static, server),
        )

    if has("gatsby"):
        return FrameworkInfo(Framework.GATSBY, version("gatsby"), static)

    if has("@11ty/eleventy"):
        return FrameworkInfo(Framework.ELEVENTY, version("@11ty/eleventy"), static)

    # Angular before backend frameworks, since Angular SSR depends on Express.
    if has("@angular/core") or ctx.has_file("angular.json"):
        return FrameworkInfo(
            Framework.ANGULAR, version("@angular/core"), _output(has("@angular/ssr"), server, static)
        )

    for dep, framework in (
        ("@adonisjs/core", Framework.ADONISJS),
        ("@nestjs/core", Framework.NESTJS),
        ("fastify", Framework.FASTIFY),
        ("express", Framework.EXPRESS),
    ):
        if has(dep):
            return FrameworkInfo(framework, version(dep), server)

    if has("react-scripts"):
        return FrameworkInfo(Framework.CRA, version("react-scripts"), static)

    if has("vite") or any(
        ctx.has_file(name) for name in ("vite.config.js", "vite.config.ts", "vite.config.mjs")
    ):
        return FrameworkInfo(Framework.VITE, version("vite"), static)

    return FrameworkInfo()