import os
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class PlatformProfile:
    """Host/target facts, resolved once per run."""

    platform: str
    host_arch: str
    target_arch: str
    cross_compile_arch: Optional[str] = None

    @classmethod
    def detect(cls, platform, host_arch, cross_compile_arch=None):
        target_arch = cross_compile_arch or host_arch
        return cls(platform, host_arch, target_arch, cross_compile_arch or None)


@dataclass(frozen=True)
class DirectorySet:
    root: str
    abseil: str
    dawn: str
    build: str

    def __post_init__(self):
        for name in ("root", "abseil", "dawn", "build"):
            object.__setattr__(self, name, os.path.abspath(getattr(self, name)))

    @classmethod
    def from_root(cls, root, dawn=None, abseil=None, build=None):
        """Default layout: <root>/dawn, <dawn>/third_party/abseil-cpp, <root>/build."""
        root = os.path.abspath(root)
        dawn = dawn or os.path.join(root, "dawn")
        abseil = abseil or os.path.join(dawn, "third_party", "abseil-cpp")
        build = build or os.path.join(root, "build")
        return cls(root=root, abseil=abseil, dawn=dawn, build=build)


@dataclass
class PlatformFlags:
    cflags: Optional[str] = None
    ldflags: Optional[str] = None
    cross_compile_flag: Optional[str] = None
    backend_flags: List[str] = field(default_factory=list)
    compiler_flags: List[str] = field(default_factory=list)
