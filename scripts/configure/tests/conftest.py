"""
Shared pytest fixtures for the configure tests.

Nothing here runs git or cmake: `subprocess.run` is replaced by a recorder
that returns canned exit codes keyed on the command.
"""
import subprocess
from pathlib import Path

import pytest

from scripts.configure.profile import DirectorySet


class SubprocessRecorder:
    """Records every subprocess.run call and answers with scripted exit codes."""

    def __init__(self):
        self.calls = []
        self.returncodes = []

    def set_returncode(self, predicate, returncode):
        self.returncodes.append((predicate, returncode))

    def __call__(self, cmd, **kwargs):
        self.calls.append((list(cmd), kwargs))
        returncode = 0
        for predicate, code in self.returncodes:
            if predicate(cmd):
                returncode = code
        return subprocess.CompletedProcess(cmd, returncode, stdout="", stderr="")

    def commands(self, program=None):
        return [cmd for cmd, _ in self.calls if program is None or cmd[0] == program]


@pytest.fixture
def recorder(monkeypatch):
    rec = SubprocessRecorder()
    monkeypatch.setattr(subprocess, "run", rec)
    return rec


@pytest.fixture
def dirs(tmp_path: Path) -> DirectorySet:
    """A root with dawn/third_party/abseil-cpp and a patch file."""
    d = DirectorySet.from_root(str(tmp_path))
    Path(d.abseil).mkdir(parents=True)
    Path(d.root, "abseil-cpp.patch").write_text("--- a/x\n+++ b/x\n")
    return d
