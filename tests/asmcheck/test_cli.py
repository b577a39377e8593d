"""End-to-end tests for the asmcheck CLI (fake metadata reader, real files)."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from asmcheck.cli import _split_tokens, main
from asmcheck.exceptions import MissingRootError

_READER = "asmcheck.engines.assembly_checker.checker.PeMetadataReader"


@pytest.fixture
def invoke(reader, tmp_path):
    """Run the CLI with the JSON reader and a bat script under tmp_path."""
    script = tmp_path / "fix.bat"

    def _invoke(*args: str):
        runner = CliRunner()
        with patch(_READER, return_value=reader):
            result = runner.invoke(
                main, ["--script", str(script), "--script-format", "bat", *args]
            )
        return result, script

    return _invoke


# ── argument handling ──


class TestSplitTokens:
    def test_first_non_flag_is_root(self):
        root, flags, surplus = _split_tokens(("-q", "/data", "/other"))
        assert root == Path("/data")
        assert flags == ["-q"]
        assert surplus == ["/other"]

    def test_no_root(self):
        with pytest.raises(MissingRootError):
            _split_tokens(("-q", "--what"))


class TestUsage:
    def test_missing_root_exits_1(self):
        result = CliRunner().invoke(main, [])
        assert result.exit_code == 1
        assert "No root folder specified." in result.output
        assert "Exit status" in result.output

    def test_only_flags_exits_1(self):
        result = CliRunner().invoke(main, ["-r", "-x"])
        assert result.exit_code == 1

    def test_missing_folder_exits_2(self, invoke, tmp_path):
        result, _ = invoke(str(tmp_path / "does-not-exist"))
        assert result.exit_code == 2
        assert "Possibly a file system link found." in result.output

    def test_unknown_flag_is_ignored(self, invoke, tmp_path, make_module):
        root = tmp_path / "bin"
        make_module(root / "lib.dll", "1.0.0.0")
        result, _ = invoke("--bogus", str(root))
        assert result.exit_code == 0

    @pytest.mark.parametrize(
        "args",
        [
            ["--script-format", "ps1", "{root}"],
            ["{root}", "--script"],
        ],
        ids=["bad-choice", "missing-value"],
    )
    def test_usage_errors_exit_1(self, tmp_path, args):
        root = tmp_path / "bin"
        root.mkdir()
        result = CliRunner().invoke(main, [a.format(root=root) for a in args])
        assert result.exit_code == 1
        assert "Usage:" in result.output


# ── scenarios ──


class TestScenarios:
    def test_clean_folder(self, invoke, tmp_path, make_module):
        root = tmp_path / "bin"
        make_module(root / "app.exe", "1.0.0.0", {"lib": "2.0.0.0"})
        make_module(root / "lib.dll", "2.0.0.0")

        result, script = invoke(str(root))

        assert result.exit_code == 0
        assert "No problems found." in result.output
        assert not script.exists()

    def test_outdated_without_replacement_is_unrecoverable(self, invoke, tmp_path, make_module):
        root = tmp_path / "bin"
        make_module(root / "app.exe", "1.0.0.0", {"lib": "2.0.0.0"})
        make_module(root / "lib.dll", "1.0.0.0")

        result, script = invoke(str(root))

        assert result.exit_code == 5
        assert "\tlib.dll v.1.0.0.0 outdated" in result.output
        assert "\t\tv.2.0.0.0 expected by app.exe" in result.output
        lines = script.read_text().splitlines()
        assert lines[0] == "rem v.2.0.0.0 => 1.0.0.0"
        assert lines[1].startswith("rem copy _from_repository_ ")

    def test_replacement_elsewhere_is_recoverable(self, invoke, tmp_path, make_module):
        root = tmp_path / "root"
        make_module(root / "bin" / "app.exe", "1.0.0.0", {"lib": "2.0.0.0"})
        make_module(root / "bin" / "lib.dll", "1.0.0.0")
        good = make_module(root / "repo" / "lib.dll", "2.0.0.0")

        result, script = invoke("-r", str(root))

        assert result.exit_code == 4
        assert f'copy "{good}" "{root / "bin" / "lib.dll"}"' in script.read_text().splitlines()

    def test_without_recursion_subfolders_are_not_scanned(self, invoke, tmp_path, make_module):
        root = tmp_path / "root"
        make_module(root / "bin" / "app.exe", "1.0.0.0", {"lib": "2.0.0.0"})
        make_module(root / "bin" / "lib.dll", "1.0.0.0")

        result, _ = invoke(str(root))

        assert result.exit_code == 0

    def test_config_redirect(self, invoke, tmp_path, make_module, make_config):
        root = tmp_path / "bin"
        make_module(root / "lib.dll", "1.0.0.0")
        make_config(root / "app.exe.config", {"lib": "3.0.0.0"})

        result, _ = invoke(str(root))

        assert result.exit_code == 5
        assert "\t\tv.3.0.0.0 expected by app.exe.config" in result.output

    def test_corrupt_binary_does_not_stop_scan(self, invoke, tmp_path, make_module):
        root = tmp_path / "bin"
        make_module(root / "app.exe", "1.0.0.0", {"lib": "1.0.0.0"})
        (root / "lib.dll").write_bytes(b"\x7fELF not an assembly")

        result, _ = invoke("-v", str(root))

        assert result.exit_code == 5
        assert "\tlib.dll v.0.0 outdated" in result.output

    def test_cross_reference_only(self, invoke, tmp_path, make_module):
        root = tmp_path / "bin"
        make_module(root / "a.exe", "1.0.0.0", {"lib": "1.0.0.0"})
        make_module(root / "b.dll", "1.0.0.0", {"lib": "2.0.0.0"})
        make_module(root / "lib.dll", "2.0.0.0")

        plain, _ = invoke(str(root))
        crossed, _ = invoke("-x", str(root))

        assert plain.exit_code == 0
        assert crossed.exit_code == 3
        assert "cross-referenced by:" in crossed.output

    def test_json_output(self, invoke, tmp_path, make_module):
        root = tmp_path / "bin"
        make_module(root / "app.exe", "1.0.0.0", {"lib": "2.0.0.0"})
        make_module(root / "lib.dll", "1.0.0.0")

        result, script = invoke("--json", str(root))

        doc = json.loads(result.output)
        assert doc["exit_status"] == 5
        assert doc["modules_scanned"] == 2
        assert doc["outdated"][0]["module"] == str(root / "lib.dll")
        assert doc["script"] == str(script)

    def test_unwritable_script_still_reports(self, reader, tmp_path, make_module):
        root = tmp_path / "bin"
        make_module(root / "app.exe", "1.0.0.0", {"lib": "2.0.0.0"})
        make_module(root / "lib.dll", "1.0.0.0")
        script = tmp_path / "nope" / "fix.bat"

        with patch(_READER, return_value=reader):
            result = CliRunner().invoke(
                main, ["--script", str(script), "--script-format", "bat", str(root)]
            )

        assert result.exit_code == 5
        assert "\tlib.dll v.1.0.0.0 outdated" in result.output
        assert "Remediation script written" not in result.output
        assert not script.exists()
