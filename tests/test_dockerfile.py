import pytest

from coolpack.dockerfile import (
    apt_install,
    build_args,
    build_cache_mount,
    cache_mount,
    copy_package_files,
    format_cmd_command,
    is_spa,
    package_manager_install,
    server_copy_statements,
    static_output_dir,
)
from coolpack.plan import Plan


def test_format_cmd_command():
    assert format_cmd_command("npm run start") == '["npm", "run", "start"]'
    assert format_cmd_command("   ") == "[]"


def test_is_spa_requires_boolean_true():
    assert is_spa(Plan(metadata={"is_spa": True})) is True
    assert is_spa(Plan(metadata={"is_spa": "true"})) is False
    assert is_spa(Plan()) is False


@pytest.mark.parametrize(
    "framework, expected",
    [
        ("nextjs", "out"),
        ("nuxt", ".output/public"),
        ("gatsby", "public"),
        ("sveltekit", "build"),
        ("eleventy", "_site"),
        ("tanstack-start", ".output/public"),
        ("", "dist"),
    ],
)
def test_static_output_dir_defaults(framework, expected):
    assert static_output_dir(Plan(framework=framework)) == expected


def test_static_output_dir_override():
    plan = Plan(framework="nextjs", metadata={"output_dir_override": "site"})
    assert static_output_dir(plan) == "site"


def test_cache_mount_npm_and_default():
    assert cache_mount(Plan(), "npm") == "--mount=type=cache,target=/root/.npm "
    assert cache_mount(Plan(), "yarnberry") == "--mount=type=cache,target=/root/.npm "


def test_cache_mount_yarn_versions():
    v1 = cache_mount(Plan(package_manager_version="1.22.19"), "yarn")
    berry = cache_mount(Plan(package_manager_version="4.0.0"), "yarn")
    assert v1 == "--mount=type=cache,target=/usr/local/share/.cache/yarn "
    assert berry == "--mount=type=cache,target=/root/.yarn/berry/cache "


def test_cache_mount_cypress():
    result = cache_mount(Plan(metadata={"has_cypress": True}), "pnpm")
    assert result.split() == [
        "--mount=type=cache,target=/root/.local/share/pnpm/store",
        "--mount=type=cache,target=/root/.cache/Cypress",
    ]


def test_build_cache_mount_nextjs():
    result = build_cache_mount(Plan(framework="nextjs"))
    assert result.split() == [
        "--mount=type=cache,target=/app/.next/cache",
        "--mount=type=cache,target=/app/node_modules/.cache",
    ]
    assert result.endswith(" ")


def test_build_cache_mount_deduplicates_and_filters():
    plan = Plan(
        framework="nuxt",
        metadata={"has_moon": True, "cache_directories": [".turbo", "/abs"]},
    )
    mounts = build_cache_mount(plan).split()
    assert len(mounts) == len(set(mounts))
    assert "--mount=type=cache,target=/app/.moon/cache" in mounts
    assert "--mount=type=cache,target=/app/.turbo" in mounts
    assert all("/abs" not in mount for mount in mounts)


def test_build_args_sorted():
    plan = Plan(build_env={"VITE_B": "2", "VITE_A": "1"})
    assert build_args(plan) == "ARG VITE_A\nARG VITE_B\nENV VITE_A=$VITE_A\nENV VITE_B=$VITE_B\n\n"
    assert build_args(Plan()) == ""


def test_apt_install_merges_packages():
    plan = Plan(
        metadata={
            "apt_packages": ["openssl"],
            "native_packages": ["prisma"],
            "custom_packages": ["curl", "openssl"],
        }
    )
    text = apt_install(plan)
    assert text.startswith("# Native dependencies detected: prisma\n# Custom packages: curl, openssl\n")
    assert text.count("    openssl \\\n") == 1
    assert text.endswith("    && rm -rf /var/lib/apt/lists/*\n\n")
    assert apt_install(Plan()) == ""


def test_package_manager_install():
    assert (
        package_manager_install(Plan(package_manager_version="8.0.0"), "pnpm")
        == "RUN corepack enable && corepack prepare pnpm@8.0.0 --activate\n\n"
    )
    assert package_manager_install(Plan(package_manager_version="1.22.0"), "yarn") == ""
    assert package_manager_install(Plan(package_manager_version="4.1.0"), "yarn") == "RUN corepack enable\n\n"
    assert package_manager_install(Plan(), "npm") == ""


def test_package_manager_install_bun_on_custom_base():
    plan = Plan(metadata={"base_image": "node:20"})
    assert package_manager_install(plan, "bun") == "RUN npm install -g bun\n\n"
    plan = Plan(metadata={"base_image": "oven/bun:1"})
    assert package_manager_install(plan, "bun") == ""
    assert package_manager_install(Plan(), "bun") == ""


def test_copy_package_files():
    assert copy_package_files("pnpm") == "COPY package.json pnpm-lock.yaml* ./\n\n"
    assert copy_package_files("bun") == "COPY package.json bun.lockb* bun.lock* ./\n\n"
    assert copy_package_files("yarnberry") == "COPY package.json ./\n\n"


def test_server_copy_statements():
    generic = server_copy_statements(Plan())
    assert generic == "COPY --from=builder /app/node_modules ./node_modules\nCOPY --from=builder /app .\n\n"
    nuxt = server_copy_statements(Plan(framework="nuxt"))
    assert "COPY --from=builder /app/.output ./.output\n" in nuxt
    assert "COPY --from=builder /app .\n" not in nuxt