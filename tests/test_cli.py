"""Tests for the command line entry point."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from arc_config_validator.cli import main

from conftest import BROKEN_YAML, CLEAN_RUNNER


def _run(argv, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code, capsys.readouterr().out


class TestCli:
    def test_valid_directory(self, tmp_path: Path, write_manifest, capsys) -> None:
        write_manifest("runner.yaml", CLEAN_RUNNER)

        code, out = _run([str(tmp_path)], capsys)

        assert code == 0
        assert "All YAML files are valid!" in out

    def test_dir_option(self, tmp_path: Path, write_manifest, capsys) -> None:
        write_manifest("broken.yaml", BROKEN_YAML)

        code, out = _run(["-d", str(tmp_path)], capsys)

        assert code == 1
        assert "syntax-000" in out

    def test_missing_directory(self, tmp_path: Path, capsys) -> None:
        code, out = _run(["--dir", str(tmp_path / "missing")], capsys)

        assert code == 2
        assert "env-000" in out

    def test_fix_flag(self, tmp_path: Path, write_manifest, capsys) -> None:
        path = write_manifest("runner.yaml", CLEAN_RUNNER.replace("replicas: 1\n", "replicas: 1  \n"))

        code, _ = _run(["--fix", str(tmp_path)], capsys)

        assert code == 0
        assert path.read_text(encoding="utf-8") == CLEAN_RUNNER

    def test_verbose_narration(self, tmp_path: Path, write_manifest, capsys) -> None:
        write_manifest("runner.yaml", CLEAN_RUNNER)

        code, out = _run(["-v", str(tmp_path)], capsys)

        assert code == 0
        assert "Files:" in out

    def test_json_format(self, tmp_path: Path, write_manifest, capsys) -> None:
        write_manifest("runner.yaml", CLEAN_RUNNER)

        code, out = _run(["--format", "json", str(tmp_path)], capsys)

        assert code == 0
        assert json.loads(out)["valid_files"] == 1

    def test_conflicting_directories(self, tmp_path: Path, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path), "--dir", str(tmp_path / "other")])
        assert exc_info.value.code == 2
