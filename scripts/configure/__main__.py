import os
import argparse
from . import common
from . import depot_tools
from .profile import DirectorySet, PlatformProfile


def parse_args(argv=None, environ=None):
    environ = os.environ if environ is None else environ
    parser = argparse.ArgumentParser(description="Patch abseil and configure the Dawn node bindings build.")
    parser.add_argument("--root", default=os.getcwd(), help="Project root holding abseil-cpp.patch (default: cwd)")
    parser.add_argument("--dawn-dir", help="Dawn source directory (default: <root>/dawn)")
    parser.add_argument("--abseil-dir", help="abseil-cpp source directory (default: <dawn>/third_party/abseil-cpp)")
    parser.add_argument("--build-dir", help="Build output directory (default: <root>/build)")
    parser.add_argument(
        "--cross-compile-arch",
        default=environ.get("CROSS_COMPILE_ARCH"),
        help="Target architecture on macOS (default: $CROSS_COMPILE_ARCH, else the host architecture)",
    )
    parser.add_argument("--dry-run", action="store_true", help="Print the cmake command without running anything")
    parser.add_argument("--build", action="store_true", help="Run `cmake --build` after configuring")
    return parser.parse_args(argv)


def main(argv=None, environ=None):
    environ = dict(os.environ if environ is None else environ)
    args = parse_args(argv, environ)

    profile = PlatformProfile.detect(common.get_os(), common.get_arch(), args.cross_compile_arch)
    dirs = DirectorySet.from_root(args.root, dawn=args.dawn_dir, abseil=args.abseil_dir, build=args.build_dir)
    print(f"Platform: {profile.platform} ({profile.host_arch} -> {profile.target_arch})")

    tool_env = depot_tools.get_env(dirs.root, environ)

    common.configure_project(profile, dirs, environ, tool_env, dry_run=args.dry_run, build=args.build)


if __name__ == "__main__":
    main()
