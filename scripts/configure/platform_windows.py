"""Windows platform configuration.

Dawn's gclient checkout can ship a prebuilt clang-cl and ninja under third_party.
When they are present they are passed to CMake explicitly. Otherwise nothing is
set and CMake picks up the system cl.exe and ninja from PATH.
"""

import os

from .profile import PlatformFlags


def get_bundled_clang(dawn_dir):
    return os.path.join(dawn_dir, "third_party", "llvm-build", "Release+Asserts", "bin", "clang-cl.exe")


def get_bundled_ninja(dawn_dir):
    return os.path.join(dawn_dir, "third_party", "ninja", "ninja.exe")


def get_flags(profile, dirs):
    """Get compiler flags for Windows."""
    bundled_clang = get_bundled_clang(dirs.dawn)
    if not os.path.exists(bundled_clang):
        print("Using system Ninja and MSVC (bundled clang-cl not found)")
        return PlatformFlags()

    print("Using bundled Ninja and clang-cl")
    return PlatformFlags(
        compiler_flags=[
            f"-DCMAKE_MAKE_PROGRAM={get_bundled_ninja(dirs.dawn)}",
            f"-DCMAKE_C_COMPILER={bundled_clang}",
            f"-DCMAKE_CXX_COMPILER={bundled_clang}",
        ]
    )
