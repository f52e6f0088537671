# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
Tests for the command-line entry point.
"""

import pytest

from patcher import config
from patcher.main import run
from patcher.services import artifact_io
from patcher.structures.schemas import PatchDescriptor

DESCRIPTORS = [
    PatchDescriptor(name="fix-platform-string", search='e.Linux="Linux"', replace='e.Linux="linux"'),
    PatchDescriptor(name="fix-dfu-util-name", search="dfu-util-static", replace="dfu-util", platforms={"linux"}),
]

SOURCE = 'e.Linux="Linux";spawn("dfu-util-static")'
PATCHED_LINUX = 'e.Linux="linux";spawn("dfu-util")'


@pytest.fixture
def bundle(tmp_path):
    target = tmp_path / "main-process.js"
    target.write_text(SOURCE)
    return target


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    monkeypatch.setattr(config, "PATCH_PLATFORM", "")
    monkeypatch.setattr(config, "STRICT_MULTIPLICITY", False)


@pytest.fixture
def write_calls(monkeypatch):
    calls = []
    real_save = artifact_io.save_artifact

    def counting_save(path, buffer):
        calls.append(path)
        real_save(path, buffer)

    monkeypatch.setattr(artifact_io, "save_artifact", counting_save)
    return calls


def _run(*argv, descriptors=DESCRIPTORS, host="linux"):
    return run(list(argv), descriptors=descriptors, host=host)


class TestApply:
    """Patching a bundle on disk."""

    def test_patches_for_host_platform(self, bundle, capsys):
        assert _run("--target", str(bundle)) == 0

        assert bundle.read_text() == PATCHED_LINUX
        out = capsys.readouterr().out
        assert "Platform: linux" in out
        assert "Successfully applied 2 patches:" in out

    def test_positional_platform(self, bundle, capsys):
        assert _run("darwin", "--target", str(bundle)) == 0

        assert bundle.read_text() == 'e.Linux="linux";spawn("dfu-util-static")'
        assert "SKIP  fix-dfu-util-name" in capsys.readouterr().out

    def test_override_flag_beats_positional(self, bundle):
        assert _run("darwin", "--platform", "linux-arm64", "--target", str(bundle)) == 0

        assert bundle.read_text() == PATCHED_LINUX

    def test_override_from_environment(self, bundle, monkeypatch):
        monkeypatch.setattr(config, "PATCH_PLATFORM", "macos")

        assert _run("linux", "--target", str(bundle)) == 0
        assert "dfu-util-static" in bundle.read_text()

    def test_target_from_environment(self, bundle, monkeypatch):
        monkeypatch.setattr(config, "PATCH_TARGET", str(bundle))

        assert _run() == 0
        assert bundle.read_text() == PATCHED_LINUX

    def test_rerun_does_not_write(self, bundle, write_calls, capsys):
        assert _run("--target", str(bundle)) == 0
        assert len(write_calls) == 1
        mtime = bundle.stat().st_mtime_ns

        assert _run("--target", str(bundle)) == 0

        assert len(write_calls) == 1
        assert bundle.stat().st_mtime_ns == mtime
        assert "No changes made" in capsys.readouterr().out


class TestFailures:
    """Failed descriptors and I/O errors."""

    def test_failed_patch_leaves_file_untouched(self, bundle, write_calls, capsys):
        descriptors = DESCRIPTORS + [PatchDescriptor(name="upstream-changed", search="gone()", replace="x()")]

        assert _run("--target", str(bundle), descriptors=descriptors) == 1

        assert bundle.read_text() == SOURCE
        assert write_calls == []
        err = capsys.readouterr().err
        assert "FAIL  upstream-changed" in err
        assert "Looking for: gone()" in err

    def test_strict_multiplicity_from_config(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config, "STRICT_MULTIPLICITY", True)
        target = tmp_path / "main-process.js"
        target.write_text("ab ab")
        descriptors = [PatchDescriptor(name="broad", search="ab", replace="X")]

        assert _run("--target", str(target), descriptors=descriptors) == 1
        assert target.read_text() == "ab ab"

    def test_missing_target(self, tmp_path, capsys):
        assert _run("--target", str(tmp_path / "missing.js")) == 2

        assert "ERROR:" in capsys.readouterr().err

    def test_duplicate_names(self, bundle):
        descriptors = [DESCRIPTORS[0], DESCRIPTORS[0]]

        assert _run("--target", str(bundle), descriptors=descriptors) == 2
        assert bundle.read_text() == SOURCE


class TestModes:
    """--check and --list."""

    def test_check_never_writes(self, bundle, write_calls, capsys):
        assert _run("--check", "--target", str(bundle)) == 0

        assert bundle.read_text() == SOURCE
        assert write_calls == []
        assert "Would apply 2 patches:" in capsys.readouterr().out

    def test_check_reports_failure(self, tmp_path):
        target = tmp_path / "main-process.js"
        target.write_text("unrelated")

        assert _run("--check", "--target", str(target)) == 1

    def test_list(self, capsys):
        assert _run("--list") == 0

        out = capsys.readouterr().out.splitlines()
        assert out == [
            "  1. fix-platform-string [all]",
            "  2. fix-dfu-util-name [linux]",
        ]


def test_failure_diagnostic_printed_once(bundle, capfd, caplog):
    descriptors = [PatchDescriptor(name="upstream-changed", search="gone()", replace="x()")]

    with caplog.at_level("DEBUG"):
        assert _run("--target", str(bundle), descriptors=descriptors) == 1

    assert not [r for r in caplog.records if r.levelname == "ERROR"]

    err = capfd.readouterr().err
    assert err.count("Looking for: gone()") == 1


def test_apply_script_uses_cli_entry_point():
    from patcher.main import main
    from patches import apply as apply_script

    assert apply_script.main is main
    assert "pip install -e ." in apply_script.__doc__
