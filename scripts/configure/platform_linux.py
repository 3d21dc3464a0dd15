from .profile import PlatformFlags


def get_flags(profile, dirs):
    """Get windowing backend flags for Linux."""
    return PlatformFlags(backend_flags=["-DDAWN_USE_X11=ON", "-DDAWN_USE_WAYLAND=OFF"])
