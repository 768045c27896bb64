from coolpack.node.native_deps import (
    NATIVE_DEPENDENCIES,
    NativeDependency,
    detect_native_dependencies,
    required_apt_packages,
)
from coolpack.node.package_json import PackageJSON


def test_sharp_needs_libvips():
    pkg = PackageJSON(dependencies={"sharp": "^0.33.0"})
    deps = detect_native_dependencies(pkg)
    assert [dep.package for dep in deps] == ["sharp"]
    assert required_apt_packages(deps) == ["libvips-dev"]


def test_dev_dependencies_are_detected():
    pkg = PackageJSON(dev_dependencies={"prisma": "5.0.0"})
    deps = detect_native_dependencies(pkg)
    assert [dep.package for dep in deps] == ["prisma"]
    assert required_apt_packages(deps) == ["openssl"]


def test_order_follows_the_table():
    pkg = PackageJSON(dependencies={"prisma": "5", "sharp": "1"})
    assert [dep.package for dep in detect_native_dependencies(pkg)] == ["sharp", "prisma"]


def test_apt_packages_are_deduplicated_in_order():
    pkg = PackageJSON(dependencies={"bcrypt": "5", "sqlite3": "5", "argon2": "1"})
    deps = detect_native_dependencies(pkg)
    assert [dep.package for dep in deps] == ["bcrypt", "argon2", "sqlite3"]
    assert required_apt_packages(deps) == ["build-essential", "python3"]


def test_browser_libraries_are_merged():
    pkg = PackageJSON(dependencies={"puppeteer": "22", "playwright": "1"})
    deps = detect_native_dependencies(pkg)
    packages = required_apt_packages(deps)
    assert len(packages) == len(set(packages))
    assert set(packages) == {name for dep in deps for name in dep.apt_packages}
    assert packages[0] == "chromium"


def test_no_native_dependencies():
    pkg = PackageJSON(dependencies={"react": "18"})
    assert detect_native_dependencies(pkg) == []
    assert required_apt_packages([]) == []


def test_every_table_entry_is_detected_by_its_own_name():
    for dep in NATIVE_DEPENDENCIES:
        pkg = PackageJSON(dependencies={dep.package: "1"})
        assert dep in detect_native_dependencies(pkg)
        assert dep.apt_packages


def test_required_apt_packages_accepts_custom_entries():
    deps = [
        NativeDependency("a", ("x", "y"), "first"),
        NativeDependency("b", ("y", "z"), "second"),
    ]
    assert required_apt_packages(deps) == ["x", "y", "z"]