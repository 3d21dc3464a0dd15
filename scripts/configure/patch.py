"""Idempotent application of the abseil-cpp patch.

The patch is applied once per abseil checkout. A `.patched` marker inside the
abseil tree records that it happened, so later runs only check for the marker.

`git apply` fails both when the patch is already in the tree and when the tree
has diverged. A reverse check tells the two apart; in either case the
configure run carries on.
"""

import os
import subprocess
from enum import Enum

MARKER_NAME = ".patched"
GIT_APPLY = ["git", "apply", "--ignore-space-change", "--ignore-whitespace"]


class PatchResult(Enum):
    SKIPPED = "skipped"
    APPLIED = "applied"
    ALREADY_APPLIED = "already_applied"
    FAILED = "failed"


def get_marker_path(abseil_dir):
    return os.path.join(abseil_dir, MARKER_NAME)


def write_marker(abseil_dir):
    with open(get_marker_path(abseil_dir), "w"):
        pass


def is_already_applied(abseil_dir, patch_file):
    """Check whether the patch can be reversed, i.e. is already in the tree."""
    cmd = GIT_APPLY + ["--reverse", "--check", patch_file]
    try:
        result = subprocess.run(cmd, cwd=abseil_dir, capture_output=True, text=True)
    except OSError:
        return False
    return result.returncode == 0


def ensure_patch_applied(abseil_dir, root_dir):
    """Apply abseil-cpp.patch from root_dir to abseil_dir unless the marker exists."""
    if os.path.exists(get_marker_path(abseil_dir)):
        print("abseil-cpp.patch already applied, skipping")
        return PatchResult.SKIPPED

    patch_file = os.path.join(root_dir, "abseil-cpp.patch")
    print("applying abseil-cpp.patch")
    try:
        result = subprocess.run(GIT_APPLY + [patch_file], cwd=abseil_dir)
    except OSError as e:
        print(f"Warning: could not run git apply ({e}); continuing without the abseil patch.")
        return PatchResult.FAILED

    if result.returncode == 0:
        write_marker(abseil_dir)
        return PatchResult.APPLIED

    if is_already_applied(abseil_dir, patch_file):
        print("Patch may already be applied, continuing...")
        write_marker(abseil_dir)
        return PatchResult.ALREADY_APPLIED

    print(
        f"Warning: git apply failed (exit code {result.returncode}) and the patch is not in the tree. "
        f"{abseil_dir} may have diverged from {patch_file}; continuing anyway."
    )
    return PatchResult.FAILED
