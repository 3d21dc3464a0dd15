"""macOS platform configuration.

IMPORTANT: Apple Silicon builds target macOS 11.0, the first release that runs on
arm64. Intel builds keep the 10.9 minimum and pin MAC_OS_X_VERSION_MIN_REQUIRED
to 1070 so the SDK headers don't hide older APIs.
"""

from .profile import PlatformFlags

ARM64_VERSION_MIN = "-mmacosx-version-min=11.0"
X86_64_VERSION_MIN = "-mmacosx-version-min=10.9"
X86_64_VERSION_DEFINE = "-DMAC_OS_X_VERSION_MIN_REQUIRED=1070"


def get_osx_arch(profile):
    """CMake architecture name; the override wins over the host arch."""
    arch = profile.cross_compile_arch or profile.host_arch
    if arch == "x64":
        arch = "x86_64"
    return arch


def get_flags(profile, dirs):
    """Get architecture and deployment flags for macOS."""
    flags = PlatformFlags(cross_compile_flag=f"-DCMAKE_OSX_ARCHITECTURES={get_osx_arch(profile)}")

    if profile.target_arch == "arm64":
        flags.cflags = ARM64_VERSION_MIN
        flags.ldflags = ARM64_VERSION_MIN
    else:
        flags.cflags = " ".join([X86_64_VERSION_MIN, X86_64_VERSION_DEFINE])
        flags.ldflags = X86_64_VERSION_MIN

    return flags
