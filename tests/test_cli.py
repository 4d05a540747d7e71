"""Tests for the command line interface."""

import json

from click.testing import CliRunner

from moondeob import cli
from moondeob.config import Config
from moondeob.examples import EXAMPLE_CODES


def _write_sample(path, code=None):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(code if code is not None else EXAMPLE_CODES["simple"], encoding="utf-8")
    return path


class TestProcessFile:
    """Tests for process_file."""

    def test_writes_default_output(self, tmp_path):
        input_file = _write_sample(tmp_path / "sample.lua")

        stats = cli.process_file(input_file, Config())

        output_file = tmp_path / "sample.deobfuscated.lua"
        assert stats["output"] == str(output_file)
        assert stats["identifiers_renamed"] == 4
        assert stats["complexity"] == "Low"
        assert "a1b2c3" not in output_file.read_text(encoding="utf-8")

    def test_output_dir_from_config(self, tmp_path):
        input_file = _write_sample(tmp_path / "sample.lua")
        out_dir = tmp_path / "out"

        cli.process_file(input_file, Config(output_dir=out_dir))

        assert (out_dir / "sample.deobfuscated.lua").exists()

    def test_writes_report(self, tmp_path):
        input_file = _write_sample(tmp_path / "sample.lua")
        output_file = tmp_path / "clean.lua"

        cli.process_file(input_file, Config(write_report=True), output_file)

        report = json.loads((tmp_path / "clean.lua.report.json").read_text(encoding="utf-8"))
        assert report["statistics"]["identifiers_renamed"] == 4
        assert report["identifier_renames"]["a1b2c3"] == "value"
        assert report["warnings"] == []


class TestDeobfuscateCommand:
    """Tests for the deobfuscate command."""

    def test_single_file(self, tmp_path):
        input_file = _write_sample(tmp_path / "sample.lua")

        result = CliRunner().invoke(cli.main, ["deobfuscate", str(input_file)])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "sample.deobfuscated.lua").exists()
        assert "Processing Summary" in result.output

    def test_stdout(self, tmp_path):
        input_file = _write_sample(tmp_path / "sample.lua")

        result = CliRunner().invoke(cli.main, ["deobfuscate", str(input_file), "--stdout"])

        assert result.exit_code == 0, result.output
        assert 'local value = "Hello"' in result.output
        assert not (tmp_path / "sample.deobfuscated.lua").exists()

    def test_stdout_rejects_directory(self, tmp_path):
        result = CliRunner().invoke(cli.main, ["deobfuscate", str(tmp_path), "--stdout"])

        assert result.exit_code == 2

    def test_directory(self, tmp_path):
        src = tmp_path / "src"
        _write_sample(src / "a.lua")
        _write_sample(src / "nested" / "b.lua", EXAMPLE_CODES["medium"])
        _write_sample(src / "notes.txt", "not lua")
        out = tmp_path / "out"

        result = CliRunner().invoke(cli.main, ["deobfuscate", str(src), "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert (out / "a.deobfuscated.lua").exists()
        assert (out / "nested" / "b.deobfuscated.lua").exists()
        assert not (out / "notes.deobfuscated.lua").exists()

    def test_directory_reports_unreadable_file(self, tmp_path):
        src = tmp_path / "src"
        _write_sample(src / "good.lua")
        (src / "bad.lua").write_bytes(b"\xff\xfe\xfa")

        result = CliRunner().invoke(cli.main, ["deobfuscate", str(src)])

        assert result.exit_code == 1
        assert (src / "good.deobfuscated.lua").exists()

    def test_report_and_debug_flags(self, tmp_path):
        input_file = _write_sample(tmp_path / "sample.lua")
        log_file = tmp_path / "debug.log"

        result = CliRunner().invoke(
            cli.main,
            ["deobfuscate", str(input_file), "--report", "--debug", "--debug-file", str(log_file)],
        )

        assert result.exit_code == 0, result.output
        assert (tmp_path / "sample.deobfuscated.lua.report.json").exists()
        assert "Processing complete" in log_file.read_text(encoding="utf-8")


class TestOtherCommands:
    """Tests for analyze and the example commands."""

    def test_analyze(self, tmp_path):
        input_file = _write_sample(tmp_path / "sample.lua")

        result = CliRunner().invoke(cli.main, ["analyze", str(input_file)])

        assert result.exit_code == 0, result.output
        assert "Identifier Renames" in result.output
        assert "a1b2c3" in result.output
        assert not (tmp_path / "sample.deobfuscated.lua").exists()

    def test_examples_lists_corpus(self):
        result = CliRunner().invoke(cli.main, ["examples"])

        assert result.exit_code == 0
        for name in EXAMPLE_CODES:
            assert name in result.output

    def test_example_runs_engine(self):
        result = CliRunner().invoke(cli.main, ["example", "simple"])

        assert result.exit_code == 0, result.output
        assert '"Hello"' in result.output

    def test_unknown_example_rejected(self):
        result = CliRunner().invoke(cli.main, ["example", "missing"])

        assert result.exit_code == 2


class TestEnvironmentConfig:
    """analyze and example pick up MOONDEOB_* settings like deobfuscate does."""

    def test_example_honours_fixed_point(self, monkeypatch):
        monkeypatch.setenv("MOONDEOB_SIMPLIFY_TO_FIXED_POINT", "true")
        monkeypatch.setitem(cli.EXAMPLE_CODES, "simple", "x = 2 + 1 * 0")

        result = CliRunner().invoke(cli.main, ["example", "simple"])

        assert result.exit_code == 0, result.output
        assert "x = 2\n" in result.output
        assert "2 + 0" not in result.output

    def test_example_single_pass_without_env(self, monkeypatch):
        monkeypatch.delenv("MOONDEOB_SIMPLIFY_TO_FIXED_POINT", raising=False)
        monkeypatch.setitem(cli.EXAMPLE_CODES, "simple", "x = 2 + 1 * 0")

        result = CliRunner().invoke(cli.main, ["example", "simple"])

        assert result.exit_code == 0, result.output
        assert "x = 2 + 0\n" in result.output

    def test_analyze_honours_fixed_point(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MOONDEOB_SIMPLIFY_TO_FIXED_POINT", "true")
        input_file = _write_sample(tmp_path / "sample.lua", "x = 2 + 1 * 0")
        seen = []
        real_deobfuscator = cli.Deobfuscator

        def recording_deobfuscator(config=None, chain=None):
            seen.append(config)
            return real_deobfuscator(config, chain)

        monkeypatch.setattr(cli, "Deobfuscator", recording_deobfuscator)

        result = CliRunner().invoke(cli.main, ["analyze", str(input_file)])

        assert result.exit_code == 0, result.output
        assert len(seen) == 1
        assert seen[0].simplify_to_fixed_point is True

    def test_analyze_honours_warnings(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MOONDEOB_REPORT_WARNINGS", "true")
        input_file = _write_sample(tmp_path / "sample.lua", r'print("\x07")')

        result = CliRunner().invoke(cli.main, ["analyze", str(input_file)])

        assert result.exit_code == 0, result.output
        assert "hex escape" in result.output


class TestStdoutErrors:
    """Read failures in --stdout mode."""

    def test_stdout_unreadable_file(self, tmp_path):
        input_file = tmp_path / "bad.lua"
        input_file.write_bytes(b"\xff\xfe\xfa")

        result = CliRunner().invoke(cli.main, ["deobfuscate", str(input_file), "--stdout"])

        assert result.exit_code == 1
        assert "Error" in result.output
