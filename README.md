# coolpack

coolpack is a library for working out how a Node.js project is built.
It reads `package.json` and the project's config files, works out the
package manager and framework, and turns a build plan into a multi-stage
Dockerfile.

## Installation

```
pip install .
```

## What it provides

- `coolpack.plan`: the `Plan` dataclass (provider, language, framework,
  package manager, install/build/start commands, detected files,
  metadata, build and runtime environment). `Plan.to_dict()` and
  `Plan.to_json()` serialise it and leave out empty optional fields.
  `Plan.from_dict()` and `load_plan(path)` read it back and raise
  `ValueError` on malformed JSON or wrongly typed fields.
- `coolpack.context`: `Context(path, env)` with `has_file`, `read_file`
  and `list_files` (glob patterns, results relative to the root).
- `coolpack.node.package_json`: `parse_package_json(data)` returns a
  `PackageJSON` with `has_script`, `get_script`, `has_dependency`,
  `get_dependency_version`, `get_package_manager_info` and `is_monorepo`.
  Workspaces may be a list or an object with a `packages` list.
- `coolpack.node.package_manager`: `detect_package_manager(ctx, pkg)`
  checks the `packageManager` field, then lock files, then `engines`, and
  falls back to npm. The resulting `PackageManagerInfo` gives
  `install_command()`, `run_command()` and `lock_file()`.
  `is_yarn_berry(version)` tells Yarn 2+ from Yarn 1.
- `coolpack.node.framework`: `detect_framework(ctx, pkg)` recognises
  Next.js, Remix / React Router, Nuxt, Astro, SvelteKit, Solid Start,
  TanStack Start, Gatsby, Eleventy, Angular, AdonisJS, NestJS, Fastify,
  Express, Create React App and Vite. It also decides whether the output
  is `static` or `server` by reading settings such as `output: 'export'`,
  `ssr: false` or `server.preset: 'static'` from the config files.
  `FrameworkInfo.default_build_command(pm)` and
  `FrameworkInfo.default_start_command(pm)` give the framework defaults.
- `coolpack.node.config_parser`: `find_property_value(source, name)` and
  `find_nested_property_value(source, *path)` pull property values out of
  JavaScript or TypeScript config sources without running them.
- `coolpack.node.native_deps`: `detect_native_dependencies(pkg)` and
  `required_apt_packages(deps)` map packages such as `sharp`, `canvas`,
  `puppeteer` or `better-sqlite3` to the Debian packages they need.
- `coolpack.overrides`: `parse_env_vars`, `apply_command_overrides`,
  `apply_static_server_setting`, `apply_spa_setting`,
  `apply_output_dir_setting` and `apply_custom_packages` change a plan
  from explicit values or from environment variables.
- `coolpack.generator`: `Generator(plan).generate_dockerfile()` returns
  the Dockerfile text for a plan whose provider is `node`, and raises
  `UnsupportedProviderError` for any other provider. Static sites are
  served by Caddy (default) or nginx; server apps run on Node.js, or on
  the `oven/bun` image when the package manager is Bun.
- `coolpack.dockerfile`: the individual Dockerfile pieces the generator
  assembles (cache mounts, APT install step, build args, copy steps).
- `coolpack.report`: `format_plan(plan)` renders a readable summary;
  `write_plan(plan, path)` writes the plan as indented JSON.

## Example

```python
from coolpack.context import Context
from coolpack.generator import Generator
from coolpack.node.framework import detect_framework
from coolpack.node.package_json import parse_package_json
from coolpack.node.package_manager import detect_package_manager
from coolpack.plan import Plan
from coolpack.report import format_plan

ctx = Context("path/to/app")
pkg = parse_package_json(ctx.read_file("package.json"))
pm = detect_package_manager(ctx, pkg)
fw = detect_framework(ctx, pkg)

plan = Plan(
    provider="node",
    language="nodejs",
    framework=fw.name.value,
    package_manager=pm.name.value,
    install_command=pm.install_command(),
    build_command=fw.default_build_command(pm),
    start_command=fw.default_start_command(pm),
    metadata={"output_type": fw.output_type.value},
)
print(format_plan(plan))
print(Generator(plan).generate_dockerfile())
```

## Plan metadata read by the generator

| Key | Effect |
| --- | --- |
| `output_type` | `static` builds a static-file image, anything else a server image |
| `base_image` | Replaces the default base image |
| `static_server` | `nginx`, otherwise Caddy |
| `is_spa` | Serve `index.html` for every route |
| `output_dir_override` | Directory holding the built static files |
| `apt_packages`, `custom_packages`, `native_packages` | APT packages to install |
| `has_cypress`, `has_moon`, `cache_directories` | Extra BuildKit cache mounts |

Without a language version the server image uses `node:24-slim`.

## Environment variables read by `coolpack.overrides`

| Variable | Effect |
| --- | --- |
| `COOLPACK_INSTALL_CMD` | Override the install command |
| `COOLPACK_BUILD_CMD` | Override the build command |
| `COOLPACK_START_CMD` | Override the start command |
| `COOLPACK_STATIC_SERVER` | `caddy` (default) or `nginx` |
| `COOLPACK_SPA_OUTPUT_DIR` | Override the static output directory |
| `COOLPACK_SPA` / `COOLPACK_NO_SPA` | `true` or `1` forces SPA routing on or off |
| `COOLPACK_PACKAGES` | Extra APT packages, comma separated |

Values passed to the functions take priority over these variables,
which take priority over what the plan already holds.

## What it does not do

- There is no command-line program; everything is used from Python.
- There is no single call that detects a whole project and returns a
  finished plan: the pieces above must be combined by the caller, as in
  the example.
- It does not determine the Node.js version from `engines`, `.nvmrc`,
  `.node-version`, `.tool-versions` or `mise.toml`.
- It does not run Docker; it only produces the Dockerfile text.