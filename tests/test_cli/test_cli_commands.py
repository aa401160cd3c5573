"""Tests for the stacklens CLI commands."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from stacklens.cli.main import cli

FIXTURES = Path(__file__).parent.parent / "fixtures"

LONE = ".b {\n  z-index: 5;\n}\n"
CLEAN = ".a { opacity: 0.5; }\n"


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def lone_file(tmp_path: Path) -> Path:
    path = tmp_path / "lone.scss"
    path.write_text(LONE)
    return path


@pytest.fixture()
def clean_file(tmp_path: Path) -> Path:
    path = tmp_path / "clean.css"
    path.write_text(CLEAN)
    return path


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------


class TestCheckCommand:
    def test_reports_diagnostics(self, runner, lone_file) -> None:
        result = runner.invoke(cli, ["check", str(lone_file)])
        assert result.exit_code == 1
        assert f"{lone_file}:2:3: warning:" in result.output
        assert "[ineffective-z-index]" in result.output
        assert "Summary: 1 ineffective z-index declaration(s) in 1 file(s)" in result.output

    def test_clean_file(self, runner, clean_file) -> None:
        result = runner.invoke(cli, ["check", str(clean_file)])
        assert result.exit_code == 0
        assert "Summary: 0 ineffective" in result.output

    def test_fixture(self, runner) -> None:
        result = runner.invoke(cli, ["check", str(FIXTURES / "components.scss")])
        assert result.exit_code == 1
        assert "Summary: 1 ineffective" in result.output

    def test_json_format(self, runner, lone_file, clean_file) -> None:
        result = runner.invoke(cli, ["check", "--format", "json", str(lone_file), str(clean_file)])
        assert result.exit_code == 1
        report = json.loads(result.output)
        assert report[str(clean_file)] == []
        (diag,) = report[str(lone_file)]
        assert diag["range"]["start"] == {"line": 1, "character": 2}
        assert diag["code"] == "ineffective-z-index"

    def test_parse_error(self, runner) -> None:
        result = runner.invoke(cli, ["check", str(FIXTURES / "broken.scss")])
        assert result.exit_code == 1
        assert "parse error" in result.output

    def test_missing_file(self, runner, tmp_path) -> None:
        result = runner.invoke(cli, ["check", str(tmp_path / "nope.css")])
        assert result.exit_code == 2


# ---------------------------------------------------------------------------
# inspect
# ---------------------------------------------------------------------------


class TestInspectCommand:
    def test_lists_contexts_and_rules(self, runner, clean_file) -> None:
        result = runner.invoke(cli, ["inspect", str(clean_file)])
        assert result.exit_code == 0
        assert "Stacking contexts: 1" in result.output
        assert "Rules: 1" in result.output
        assert "Ineffective z-index: 0" in result.output
        assert "1:6-1:18  opacity: 0.5" in result.output
        assert "  1:1-1:21" in result.output

    def test_parse_error(self, runner) -> None:
        result = runner.invoke(cli, ["inspect", str(FIXTURES / "broken.scss")])
        assert result.exit_code == 1
        assert "Parse error" in result.output


# ---------------------------------------------------------------------------
# fix
# ---------------------------------------------------------------------------


class TestFixCommand:
    def test_isolate_is_default(self, runner, lone_file) -> None:
        result = runner.invoke(cli, ["fix", str(lone_file)])
        assert result.exit_code == 0
        assert result.output == ".b {\n  isolation: isolate;\n  z-index: 5;\n}\n"
        assert lone_file.read_text() == LONE

    def test_remove(self, runner, lone_file) -> None:
        result = runner.invoke(cli, ["fix", "--strategy", "remove", str(lone_file)])
        assert result.exit_code == 0
        assert result.output == ".b {\n}\n"

    def test_write(self, runner, lone_file) -> None:
        result = runner.invoke(cli, ["fix", "--strategy", "remove", "--write", str(lone_file)])
        assert result.exit_code == 0
        assert lone_file.read_text() == ".b {\n}\n"
        assert "Fixed 1 declaration(s)" in result.output

    def test_clean_file_unchanged(self, runner, clean_file) -> None:
        result = runner.invoke(cli, ["fix", str(clean_file)])
        assert result.output == CLEAN

    def test_multiple_declarations(self, runner, tmp_path) -> None:
        path = tmp_path / "two.css"
        path.write_text(".a {\n  z-index: 1;\n}\n.b {\n  z-index: 2;\n}\n")
        result = runner.invoke(cli, ["fix", "--strategy", "remove", str(path)])
        assert result.output == ".a {\n}\n.b {\n}\n"

    def test_isolate_once_per_rule(self, runner, tmp_path) -> None:
        path = tmp_path / "dup.css"
        path.write_text(".a {\n  z-index: 1;\n  z-index: 2;\n}\n.b {\n  z-index: 3;\n}\n")
        result = runner.invoke(cli, ["fix", str(path)])
        assert result.output == (
            ".a {\n  isolation: isolate;\n  z-index: 1;\n  z-index: 2;\n}\n"
            ".b {\n  isolation: isolate;\n  z-index: 3;\n}\n"
        )

    def test_remove_every_declaration_in_rule(self, runner, tmp_path) -> None:
        path = tmp_path / "dup.css"
        path.write_text(".a {\n  z-index: 1;\n  z-index: 2;\n}\n")
        result = runner.invoke(cli, ["fix", "--strategy", "remove", str(path)])
        assert result.output == ".a {\n}\n"

    def test_isolate_fixes_every_declaration(self, runner, tmp_path) -> None:
        path = tmp_path / "dup.css"
        path.write_text(".a {\n  z-index: 1;\n  z-index: 2;\n}\n")
        runner.invoke(cli, ["fix", "--write", str(path)])
        result = runner.invoke(cli, ["check", str(path)])
        assert result.exit_code == 0


# ---------------------------------------------------------------------------
# relative paths
# ---------------------------------------------------------------------------


class TestRelativePaths:
    @pytest.fixture(autouse=True)
    def in_tmp_dir(self, tmp_path, monkeypatch) -> None:
        (tmp_path / "styles.scss").write_text(LONE)
        monkeypatch.chdir(tmp_path)

    def test_check(self, runner) -> None:
        result = runner.invoke(cli, ["check", "styles.scss"])
        assert result.exit_code == 1
        assert "styles.scss:2:3: warning:" in result.output

    def test_inspect(self, runner) -> None:
        result = runner.invoke(cli, ["inspect", "styles.scss"])
        assert result.exit_code == 0
        assert "Ineffective z-index: 1" in result.output

    def test_fix(self, runner) -> None:
        result = runner.invoke(cli, ["fix", "--strategy", "remove", "styles.scss"])
        assert result.exit_code == 0
        assert result.output == ".b {\n}\n"

    def test_watch_once(self, runner) -> None:
        result = runner.invoke(cli, ["watch", "--once", "styles.scss"])
        assert result.exit_code == 0
        assert "styles.scss (v0)" in result.output


# ---------------------------------------------------------------------------
# watch
# ---------------------------------------------------------------------------


class TestWatchCommand:
    def test_once(self, runner, lone_file) -> None:
        result = runner.invoke(cli, ["watch", "--once", str(lone_file)])
        assert result.exit_code == 0
        assert "(v0): 0 stacking context declaration(s), 1 ineffective z-index" in result.output
        assert "[ineffective-z-index]" in result.output

    def test_once_reports_parse_failure(self, runner) -> None:
        result = runner.invoke(cli, ["watch", "--once", str(FIXTURES / "broken.scss")])
        assert result.exit_code == 0
        assert "keeping last result" in result.output

    def test_invalid_timing(self, runner, lone_file) -> None:
        result = runner.invoke(cli, ["watch", "--once", "--debounce-ms", "0", str(lone_file)])
        assert result.exit_code == 2


class TestGroup:
    def test_version(self, runner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_help_lists_commands(self, runner) -> None:
        result = runner.invoke(cli, ["--help"])
        for name in ("check", "inspect", "fix", "watch"):
            assert name in result.output
