"""Tests for the idempotent abseil patch step."""
import os

from scripts.configure.patch import PatchResult, ensure_patch_applied, get_marker_path


def _is_reverse_check(cmd):
    return "--reverse" in cmd


def _is_forward_apply(cmd):
    return cmd[:2] == ["git", "apply"] and "--reverse" not in cmd


def test_applies_and_writes_marker(recorder, dirs):
    result = ensure_patch_applied(dirs.abseil, dirs.root)

    assert result is PatchResult.APPLIED
    assert os.path.exists(get_marker_path(dirs.abseil))
    assert os.path.getsize(get_marker_path(dirs.abseil)) == 0

    cmd, kwargs = recorder.calls[0]
    patch_file = os.path.join(dirs.root, "abseil-cpp.patch")
    assert cmd == ["git", "apply", "--ignore-space-change", "--ignore-whitespace", patch_file]
    assert kwargs["cwd"] == dirs.abseil


def test_second_call_is_existence_check_only(recorder, dirs):
    ensure_patch_applied(dirs.abseil, dirs.root)
    mtime = os.stat(get_marker_path(dirs.abseil)).st_mtime_ns

    assert ensure_patch_applied(dirs.abseil, dirs.root) is PatchResult.SKIPPED
    assert len(recorder.calls) == 1
    assert os.stat(get_marker_path(dirs.abseil)).st_mtime_ns == mtime


def test_does_not_change_cwd(recorder, dirs):
    before = os.getcwd()
    ensure_patch_applied(dirs.abseil, dirs.root)
    assert os.getcwd() == before


def test_already_applied(recorder, dirs, capsys):
    recorder.set_returncode(_is_forward_apply, 1)

    result = ensure_patch_applied(dirs.abseil, dirs.root)

    assert result is PatchResult.ALREADY_APPLIED
    assert os.path.exists(get_marker_path(dirs.abseil))
    assert "may already be applied" in capsys.readouterr().out


def test_failed_patch_continues_without_marker(recorder, dirs, capsys):
    recorder.set_returncode(_is_forward_apply, 1)
    recorder.set_returncode(_is_reverse_check, 1)

    result = ensure_patch_applied(dirs.abseil, dirs.root)

    assert result is PatchResult.FAILED
    assert not os.path.exists(get_marker_path(dirs.abseil))
    assert "continuing anyway" in capsys.readouterr().out
    assert len(recorder.commands("git")) == 2


def test_missing_git_continues(dirs, tmp_path, monkeypatch, capsys):
    empty_bin = tmp_path / "empty-bin"
    empty_bin.mkdir()
    monkeypatch.setenv("PATH", str(empty_bin))

    result = ensure_patch_applied(dirs.abseil, dirs.root)

    assert result is PatchResult.FAILED
    assert not os.path.exists(get_marker_path(dirs.abseil))
    assert "could not run git apply" in capsys.readouterr().out
