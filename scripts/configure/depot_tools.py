import os


def get_depot_tools_dir(root_dir):
    return os.path.join(root_dir, "depot_tools")


def get_env(root_dir, base_env):
    """Get environment variables for the bundled depot_tools checkout, if any."""
    depot_tools_dir = get_depot_tools_dir(root_dir)
    if not os.path.isdir(depot_tools_dir):
        return {}

    path = base_env.get("PATH", "")
    return {
        "PATH": os.pathsep.join([depot_tools_dir, path]) if path else depot_tools_dir,
        # Use the locally installed Visual Studio instead of Google's hermetic toolchain
        "DEPOT_TOOLS_WIN_TOOLCHAIN": "0",
    }
