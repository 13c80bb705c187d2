"""Integration tests for the dmig command surface."""

import json

import pytest
from click.testing import CliRunner

from conftest import read
from directivemig.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_path(tmp_path):
    return str(tmp_path / "directivemig.json")


class TestHelp:
    def test_root_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("migrate", "collect-directive-names", "generate-config"):
            assert name in result.output

    def test_command_help_is_ascii(self, runner):
        """Windows consoles (CP1252) choke on non-ASCII help text."""
        for args in (["migrate", "--help"], ["collect-directive-names", "--help"], ["generate-config", "--help"]):
            result = runner.invoke(cli, args)
            assert result.exit_code == 0
            result.output.encode("ascii")

    def test_migrate_options(self, runner):
        result = runner.invoke(cli, ["migrate", "--help"])
        for option in ("--dry-run", "--diff", "--phase", "--target", "--match-mode", "--extension"):
            assert option in result.output


class TestMigrate:
    def test_migrates_corpus(self, runner, corpus, config_path):
        result = runner.invoke(cli, ["--config", config_path, "migrate", str(corpus)])

        assert result.exit_code == 0, result.output
        assert read(corpus / "tests/ui/basic.rs").startswith("//@ run-pass\n")
        assert "Migration Summary" in result.output

    def test_dry_run_with_diff(self, runner, corpus, config_path):
        result = runner.invoke(
            cli, ["--config", config_path, "migrate", str(corpus), "--dry-run", "--diff"]
        )

        assert result.exit_code == 0, result.output
        assert "+//@ run-pass" in result.output
        assert "no files were modified" in result.output
        assert read(corpus / "tests/ui/basic.rs").startswith("// run-pass\n")

    def test_manual_directives_from_config(self, runner, corpus, config_path):
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump({"directives": {"manual_directives": ["// run-pass"]}}, f)

        result = runner.invoke(cli, ["--config", config_path, "migrate", str(corpus), "--phase", "rest"])

        assert result.exit_code == 0, result.output
        assert read(corpus / "tests/codegen/simd.rs").splitlines()[1] == "//@ run-pass"
        assert read(corpus / "tests/ui/basic.rs").startswith("// run-pass\n")

    def test_missing_argument(self, runner, config_path):
        result = runner.invoke(cli, ["--config", config_path, "migrate"])
        assert result.exit_code == 2
        assert "CORPUS_ROOT is required" in result.output

    def test_nonexistent_root(self, runner, tmp_path, config_path):
        result = runner.invoke(cli, ["--config", config_path, "migrate", str(tmp_path / "nope")])
        assert result.exit_code == 2

    def test_missing_collected_directives(self, runner, corpus, config_path):
        result = runner.invoke(
            cli, ["--config", config_path, "migrate", str(corpus), "--target", "wasm32-unknown-unknown"]
        )
        assert result.exit_code == 1
        assert "FileAccessError" in result.output


class TestCollectDirectiveNames:
    def test_prints_sorted_names(self, runner, corpus, config_path):
        result = runner.invoke(cli, ["--config", config_path, "collect-directive-names", str(corpus)])

        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == ["compile-flags", "run-pass", "run-rustfix"]

    def test_json(self, runner, corpus, config_path):
        result = runner.invoke(
            cli, ["--config", config_path, "collect-directive-names", str(corpus), "--phase", "rest", "--json"]
        )
        assert json.loads(result.output) == ["compile-flags"]

    def test_malformed_directive_exit_code(self, runner, corpus, config_path):
        listing = corpus / "build" / "x86_64-apple-darwin" / "test" / "__directive_lines.txt"
        listing.write_text("//[foo ignore-windows\n", encoding="utf-8")

        result = runner.invoke(cli, ["--config", config_path, "collect-directive-names", str(corpus)])

        assert result.exit_code == 1
        assert "MalformedDirectiveError" in result.output


class TestGenerateConfig:
    def test_writes_config(self, runner, config_path):
        result = runner.invoke(cli, ["--config", config_path, "generate-config"])

        assert result.exit_code == 0, result.output
        with open(config_path, encoding="utf-8") as f:
            assert json.load(f)["directives"]["manual_directives"] == []

    def test_explicit_path(self, runner, tmp_path):
        target = tmp_path / "elsewhere.json"
        result = runner.invoke(cli, ["generate-config", "--path", str(target)])
        assert result.exit_code == 0, result.output
        assert target.exists()

    def test_existing_config_conflict(self, runner, config_path):
        with open(config_path, "w", encoding="utf-8") as f:
            f.write("{}")

        result = runner.invoke(cli, ["--config", config_path, "generate-config"])

        assert result.exit_code == 3
        assert "already exists" in result.output
        with open(config_path, encoding="utf-8") as f:
            assert f.read() == "{}"
