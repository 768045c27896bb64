"""Pieces of a generated Node.js Dockerfile, each derived from a plan."""

from __future__ import annotations

from typing import Any

from coolpack.plan import Plan

_STATIC_OUTPUT_DIRS = {
    "nextjs": "out",
    "nuxt": ".output/public",
    "astro": "dist",
    "gatsby": "public",
    "vite": "dist",
    "create-react-app": "dist",
    "angular": "dist",
    "sveltekit": "build",
    "solid-start": ".output/public",
    "tanstack-start": ".output/public",
    "eleventy": "_site",
}

_INSTALL_CACHES = {
    "npm": "/root/.npm",
    "pnpm": "/root/.local/share/pnpm/store",
    "bun": "/root/.bun/install/cache",
}

_BUILD_CACHES = {
    "nextjs": ("/app/.next/cache",),
    "remix": ("/app/.cache", "/app/.react-router"),
    "react-router": ("/app/.cache", "/app/.react-router"),
    "vite": ("/app/node_modules/.vite",),
    "tanstack-start": ("/app/node_modules/.vite",),
    "astro": ("/app/node_modules/.astro",),
    "nuxt": ("/app/node_modules/.cache",),
}

_PACKAGE_FILES = {
    "npm": "package-lock.json* ",
    "yarn": "yarn.lock* .yarnrc.yml* ",
    "pnpm": "pnpm-lock.yaml* ",
    "bun": "bun.lockb* bun.lock* ",
}

_SERVER_COPIES = {
    "nextjs": (".next ./.next", "public ./public", "package.json ./"),
    "nuxt": (".output ./.output",),
    "remix": ("build ./build", "public ./public", "package.json ./"),
    "astro": ("dist ./dist",),
    "sveltekit": ("build ./build", "package.json ./"),
    "solid-start": (".output ./.output",),
    "tanstack-start": (".output ./.output",),
}


def _mount(target: str) -> str:
    return f"--mount=type=cache,target={target}"


def _strings(value: Any) -> list[str]:
    if isinstance(value, (list, tuple)):
        return [item for item in value if isinstance(item, str)]
    return []


def _metadata_string(plan: Plan, key: str) -> str:
    value = plan.metadata.get(key)
    return value if isinstance(value, str) else ""


def _is_yarn_berry(plan: Plan) -> bool:
    version = plan.package_manager_version
    return bool(version) and not version.startswith("1.")


def format_cmd_command(cmd: str) -> str:
    """Turn a command line into the JSON-array form used by CMD."""
    return "[" + ", ".join(f'"{part}"' for part in cmd.split()) + "]"


def is_spa(plan: Plan) -> bool:
    """Return whether the plan marks the application as a single-page app."""
    value = plan.metadata.get("is_spa")
    return isinstance(value, bool) and value


def static_output_dir(plan: Plan) -> str:
    """Return the directory holding the built static files."""
    override = _metadata_string(plan, "output_dir_override")
    if override:
        return override
    return _STATIC_OUTPUT_DIRS.get(plan.framework, "dist")


def cache_mount(plan: Plan, pm: str) -> str:
    """Return the BuildKit cache mounts for the install step, with a trailing space."""
    if pm == "yarn":
        target = "/root/.yarn/berry/cache" if _is_yarn_berry(plan) else "/usr/local/share/.cache/yarn"
    else:
        target = _INSTALL_CACHES.get(pm, "/root/.npm")
    caches = [_mount(target)]
    if isinstance(plan.metadata.get("has_cypress"), bool):
        caches.append(_mount("/root/.cache/Cypress"))
    return " ".join(caches) + " "


def build_cache_mount(plan: Plan) -> str:
    """Return the BuildKit cache mounts for the build step, with a trailing space."""
    targets = list(_BUILD_CACHES.get(plan.framework, ()))
    targets.append("/app/node_modules/.cache")
    if isinstance(plan.metadata.get("has_moon"), bool):
        targets.append("/app/.moon/cache")
    targets.extend(
        f"/app/{directory}"
        for directory in _strings(plan.metadata.get("cache_directories"))
        if not directory.startswith("/")
    )
    caches = list(dict.fromkeys(_mount(target) for target in targets))
    if not caches:
        return ""
    return " ".join(caches) + " "


def build_args(plan: Plan) -> str:
    """Return ARG and ENV lines for the build-time variables, sorted by name."""
    if not plan.build_env:
        return ""
    keys = sorted(plan.build_env)
    lines = [f"ARG {key}\n" for key in keys]
    lines.extend(f"ENV {key}=${key}\n" for key in keys)
    return "".join(lines) + "\n"


def apt_install(plan: Plan) -> str:
    """Return the RUN step installing native and custom APT packages, or ""."""
    custom = _strings(plan.metadata.get("custom_packages"))
    packages = list(dict.fromkeys([*_strings(plan.metadata.get("apt_packages")), *custom]))
    if not packages:
        return ""
    out = []
    native = _strings(plan.metadata.get("native_packages"))
    if native:
        out.append(f"# Native dependencies detected: {', '.join(native)}\n")
    if custom:
        out.append(f"# Custom packages: {', '.join(custom)}\n")
    out.append("RUN apt-get update && apt-get install -y --no-install-recommends \\\n")
    out.extend(f"    {pkg} \\\n" for pkg in packages)
    out.append("    && rm -rf /var/lib/apt/lists/*\n\n")
    return "".join(out)


def package_manager_install(plan: Plan, pm: str) -> str:
    """Return the step that makes the package manager available, or ""."""
    version = plan.package_manager_version
    if pm == "pnpm":
        return f"RUN corepack enable && corepack prepare pnpm@{version or 'latest'} --activate\n\n"
    if pm == "yarn":
        # Yarn 1 ships with the node image; later versions come through corepack.
        return "RUN corepack enable\n\n" if _is_yarn_berry(plan) else ""
    if pm == "bun":
        base = _metadata_string(plan, "base_image")
        if base and "bun" not in base:
            target = f"bun@{version}" if version else "bun"
            return f"RUN npm install -g {target}\n\n"
    return ""


def copy_package_files(pm: str) -> str:
    """Return the COPY step for package.json and the lock files of a package manager."""
    return f"COPY package.json {_PACKAGE_FILES.get(pm, '')}./\n\n"


def server_copy_statements(plan: Plan) -> str:
    """Return the COPY steps bringing the built server application into the runner."""
    lines = ["COPY --from=builder /app/node_modules ./node_modules\n"]
    copies = _SERVER_COPIES.get(plan.framework)
    if copies is None:
        lines.append("COPY --from=builder /app .\n")
    else:
        lines.extend(f"COPY --from=builder /app/{item}\n" for item in copies)
    return "".join(lines) + "\n"