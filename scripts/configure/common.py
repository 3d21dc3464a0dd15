import os
import subprocess
import sys
import platform
import shutil

from . import platform_linux, platform_macos, platform_windows
from .patch import ensure_patch_applied
from .profile import PlatformFlags

CMAKE_GENERATOR = "-GNinja"

# Fixed feature toggles for the Dawn node bindings build
DAWN_OPTIONS = [
    "-DDAWN_BUILD_NODE_BINDINGS=ON",
    "-DDAWN_BUILD_SAMPLES=OFF",
    "-DTINT_BUILD_TESTS=OFF",
    "-DTINT_BUILD_CMD_TOOLS=OFF",
    "-DDAWN_USE_GLFW=OFF",
    "-DDAWN_SUPPORTS_GLFW_FOR_WINDOWING=OFF",
    "-DDAWN_ENABLE_PIC=ON",
    "-DDAWN_ENABLE_SPIRV_VALIDATION=ON",
    "-DDAWN_ALWAYS_ASSERT=ON",
    "-DDAWN_FORCE_SYSTEM_COMPONENT_LOAD=ON",
]


def get_os():
    """Get OS name for the platform profile."""
    system = platform.system()
    if system == "Windows":
        return "windows"
    elif system == "Darwin":
        return "macos"
    elif system == "Linux":
        return "linux"
    else:
        return system.lower()


def get_arch():
    """Get host architecture."""
    machine = platform.machine().lower()
    if machine in ("x86_64", "amd64"):
        return "x64"
    elif machine in ("arm64", "aarch64"):
        return "arm64"
    else:
        return machine


def reset_build_directory(build_dir):
    """Remove the build directory if present and recreate it empty.

    A symlink or file at build_dir is removed itself; rmtree refuses both.
    """
    if os.path.islink(build_dir) or os.path.isfile(build_dir):
        try:
            os.remove(build_dir)
        except FileNotFoundError:
            pass
    else:
        shutil.rmtree(build_dir, ignore_errors=True)
    os.makedirs(build_dir, exist_ok=True)


def resolve_platform_flags(profile, dirs):
    """Get the platform-specific flags for the given profile."""
    modules = {
        "windows": platform_windows,
        "macos": platform_macos,
        "linux": platform_linux,
    }
    module = modules.get(profile.platform)
    if module is None:
        print(f"No platform flags for {profile.platform}, using common flags only")
        return PlatformFlags()

    return module.get_flags(profile, dirs)


def filter_flags(flags):
    """Drop empty entries, keeping the order of the rest."""
    return [flag for flag in flags if flag]


def get_configure_command(dirs, flags):
    """Assemble the cmake configure command."""
    cmake_cmd = [
        "cmake",
        "-S",
        dirs.dawn,
        "-B",
        dirs.build,
        CMAKE_GENERATOR,
        "-DCMAKE_BUILD_TYPE=Release",
        *DAWN_OPTIONS,
        *flags.compiler_flags,
        flags.cross_compile_flag,
        *flags.backend_flags,
    ]
    return filter_flags(cmake_cmd)


def get_configure_env(base_env, tool_env, flags):
    """Process environment overlaid with the tool environment and CFLAGS/LDFLAGS.

    CFLAGS/LDFLAGS are removed when the platform computes none.
    """
    env = dict(base_env)
    env.update(tool_env or {})
    for name, value in (("CFLAGS", flags.cflags), ("LDFLAGS", flags.ldflags)):
        if value:
            env[name] = value
        else:
            env.pop(name, None)
    return env


def run_configure(dirs, flags, base_env, tool_env=None, dry_run=False):
    """Configure CMake with the assembled command."""
    cmake_cmd = get_configure_command(dirs, flags)
    env = get_configure_env(base_env, tool_env, flags)
    print(f"Configuring CMake: {' '.join(cmake_cmd)}")
    if flags.cflags or flags.ldflags:
        print(f"  CFLAGS={flags.cflags or ''} LDFLAGS={flags.ldflags or ''}")

    if dry_run:
        print("[DRY-RUN] Skipping cmake")
        return cmake_cmd

    result = subprocess.run(cmake_cmd, cwd=dirs.dawn, env=env)
    if result.returncode != 0:
        print("CMake configure failed")
        sys.exit(1)

    return cmake_cmd


def build_cmake(dirs, base_env, tool_env=None):
    """Build the configured project using CMake."""
    env = dict(base_env)
    env.update(tool_env or {})
    cmake_cmd = ["cmake", "--build", dirs.build, "--config", "Release"]
    print(f"Building: {' '.join(cmake_cmd)}")
    result = subprocess.run(cmake_cmd, cwd=dirs.dawn, env=env)
    if result.returncode != 0:
        print("Build failed")
        sys.exit(1)


def configure_project(profile, dirs, base_env, tool_env=None, dry_run=False, build=False):
    """Common configure logic for all platforms.

    Args:
        profile: PlatformProfile of the host/target
        dirs: DirectorySet with root, abseil, dawn and build directories
        base_env: Environment the external tools inherit
        tool_env: Optional overlay from depot_tools
        dry_run: Print the cmake command without touching the filesystem
        build: Run `cmake --build` after configuring
    """
    if dry_run:
        print("[DRY-RUN] Skipping abseil patch and build directory reset")
    else:
        ensure_patch_applied(dirs.abseil, dirs.root)

        print("configure build in", dirs.build)
        reset_build_directory(dirs.build)

    flags = resolve_platform_flags(profile, dirs)

    print("Running cmake...")
    cmake_cmd = run_configure(dirs, flags, base_env, tool_env, dry_run)
    print("Configure complete!")

    if build and not dry_run:
        build_cmake(dirs, base_env, tool_env)

    return cmake_cmd
