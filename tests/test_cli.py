"""Tests for the CLI interface."""

import json
import logging

import pytest
from pathlib import Path
from unittest.mock import patch, Mock

from rich.logging import RichHandler
from typer.testing import CliRunner

from pinniped import config
from pinniped.cli import app


runner = CliRunner()


class TestCLI:
    """Tests for top-level options."""

    def test_version_flag(self):
        """Test --version flag."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "Pinniped v" in result.stdout

    def test_help_flag(self):
        """Test --help flag."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "convert" in result.stdout


class TestConvertCommand:
    """Tests for the convert command."""

    def test_missing_file_error(self, tmp_path: Path):
        """Test error when file doesn't exist."""
        result = runner.invoke(app, ["convert", str(tmp_path / "nonexistent.md")])

        assert result.exit_code != 0

    def test_unsupported_format(self, tmp_path: Path):
        """Test that unsupported files are skipped with a failure code."""
        unsupported = tmp_path / "file.xyz"
        unsupported.write_text("content")

        result = runner.invoke(app, ["convert", str(unsupported)])

        assert result.exit_code == 1
        assert "unsupported" in result.stdout.lower()

    def test_single_file_to_json(self, tmp_markdown_file: Path):
        """Test converting one Markdown file to JSON."""
        result = runner.invoke(app, ["convert", str(tmp_markdown_file)])

        assert result.exit_code == 0
        output = tmp_markdown_file.with_suffix(".json")
        assert len(json.loads(output.read_text(encoding="utf-8"))["blocks"]) == 8

    def test_single_file_to_markdown(self, tmp_markdown_file: Path, sample_markdown: str):
        """Test that --format md writes a suffixed Markdown file."""
        result = runner.invoke(app, ["convert", str(tmp_markdown_file), "--format", "md"])

        assert result.exit_code == 0
        output = tmp_markdown_file.parent / "notes-pinniped.md"
        assert output.read_text(encoding="utf-8") == sample_markdown

    def test_output_option_sets_format(self, tmp_markdown_file: Path, tmp_path: Path):
        """Test that the --output extension picks the format."""
        output = tmp_path / "out" / "result.md"
        output.parent.mkdir()

        result = runner.invoke(app, ["convert", str(tmp_markdown_file), "-o", str(output)])

        assert result.exit_code == 0
        assert output.exists()

    def test_bad_format(self, tmp_markdown_file: Path):
        result = runner.invoke(app, ["convert", str(tmp_markdown_file), "--format", "html"])

        assert result.exit_code == 1

    def test_folder_conversion(self, tmp_path: Path):
        """Test converting every Markdown file in a folder."""
        (tmp_path / "a.md").write_text("# A", encoding="utf-8")
        (tmp_path / "b.txt").write_text("B text", encoding="utf-8")
        (tmp_path / "ignored.xyz").write_text("Ignored")
        (tmp_path / "existing.json").write_text('{"blocks": []}', encoding="utf-8")

        result = runner.invoke(app, ["convert", str(tmp_path)])

        assert result.exit_code == 0
        assert (tmp_path / "a.json").exists()
        assert (tmp_path / "b.json").exists()
        assert "2 succeeded" in result.stdout

    def test_folder_skips_own_outputs(self, tmp_path: Path):
        """Test that files with the -pinniped suffix are not converted again."""
        (tmp_path / "original.md").write_text("Original", encoding="utf-8")
        (tmp_path / "original-pinniped.md").write_text("Already done", encoding="utf-8")

        result = runner.invoke(app, ["convert", str(tmp_path)])

        assert result.exit_code == 0
        assert (tmp_path / "original.json").exists()
        assert not (tmp_path / "original-pinniped.json").exists()
        assert "1 succeeded" in result.stdout

    def test_folder_not_recursive(self, tmp_path: Path):
        nested = tmp_path / "nested"
        nested.mkdir()
        (tmp_path / "top.md").write_text("Top", encoding="utf-8")
        (nested / "deep.md").write_text("Deep", encoding="utf-8")

        result = runner.invoke(app, ["convert", str(tmp_path), "--no-recursive"])

        assert result.exit_code == 0
        assert (tmp_path / "top.json").exists()
        assert not (nested / "deep.json").exists()

    def test_folder_reports_failures(self, tmp_path: Path):
        (tmp_path / "empty.md").write_text("", encoding="utf-8")

        result = runner.invoke(app, ["convert", str(tmp_path)])

        assert result.exit_code == 1
        assert "1 failed" in result.stdout

    @patch("pinniped.cli.DocumentConverter")
    def test_format_passed_to_converter(self, mock_converter_class: Mock, tmp_markdown_file: Path):
        """Test --format option is passed through."""
        mock_converter = Mock()
        mock_converter.convert_file.return_value = Mock(blocks=())
        mock_converter_class.return_value = mock_converter

        runner.invoke(app, ["convert", str(tmp_markdown_file), "--format", "md"])

        mock_converter_class.assert_called_once_with(output_format="md")
        assert mock_converter.convert_file.call_args[0][0] == tmp_markdown_file


class TestCheckCommand:
    """Tests for the check command."""

    def test_round_trip_ok(self, tmp_markdown_file: Path):
        result = runner.invoke(app, ["check", str(tmp_markdown_file)])

        assert result.exit_code == 0
        assert "Round trip OK" in result.stdout

    def test_round_trip_changed(self, tmp_path: Path):
        path = tmp_path / "spaced.md"
        path.write_text("Paragraph 1\n\n\n\nParagraph 2", encoding="utf-8")

        result = runner.invoke(app, ["check", str(path)])

        assert result.exit_code == 1
        assert "Paragraph 1\n\nParagraph 2" in result.stdout


class TestCellCommand:
    """Tests for the cell command."""

    def test_read_cell(self, tmp_table_file: Path):
        result = runner.invoke(app, ["cell", str(tmp_table_file), "0", "1", "0"])

        assert result.exit_code == 0
        assert "John" in result.stdout

    def test_move_then_read(self, tmp_table_file: Path):
        result = runner.invoke(
            app, ["cell", str(tmp_table_file), "0", "1", "0", "--move", "right"]
        )

        assert result.exit_code == 0
        assert "25" in result.stdout

    def test_invalid_move_keeps_position(self, tmp_table_file: Path):
        result = runner.invoke(
            app, ["cell", str(tmp_table_file), "0", "0", "0", "--move", "up"]
        )

        assert result.exit_code == 0
        assert "Cannot move up" in result.stdout
        assert "Name" in result.stdout

    def test_out_of_range(self, tmp_table_file: Path):
        result = runner.invoke(app, ["cell", str(tmp_table_file), "0", "9", "0"])

        assert result.exit_code == 1
        assert "out of range" in result.stdout

    def test_not_a_table(self, tmp_markdown_file: Path):
        result = runner.invoke(app, ["cell", str(tmp_markdown_file), "0", "0", "0"])

        assert result.exit_code == 1
        assert "not a table" in result.stdout

    def test_bracketed_content_printed_verbatim(self, tmp_path: Path):
        """Test that cell text resembling console markup is shown as written."""
        path = tmp_path / "brackets.md"
        path.write_text("|a|b|\n|---|---|\n|[/x]|[bold]y|", encoding="utf-8")

        closing = runner.invoke(app, ["cell", str(path), "0", "1", "0"])
        opening = runner.invoke(app, ["cell", str(path), "0", "1", "1"])

        assert closing.exit_code == 0
        assert "[/x]" in closing.stdout
        assert opening.exit_code == 0
        assert "[bold]y" in opening.stdout


class TestInfoCommand:
    """Tests for the info command."""

    def test_info(self, tmp_markdown_file: Path):
        result = runner.invoke(app, ["info", str(tmp_markdown_file)])

        assert result.exit_code == 0
        assert "codeBlock" in result.stdout
        assert "table" in result.stdout

    def test_info_unsupported(self, tmp_path: Path):
        path = tmp_path / "file.xyz"
        path.write_text("x")

        result = runner.invoke(app, ["info", str(path)])

        assert result.exit_code == 1

    def test_info_bracketed_language(self, tmp_path: Path):
        """Test that a code block language resembling markup is shown as written."""
        path = tmp_path / "fence.md"
        path.write_text("```[/x]\ncode\n```", encoding="utf-8")

        result = runner.invoke(app, ["info", str(path)])

        assert result.exit_code == 0
        assert "language=[/x]" in result.stdout


class TestLogging:
    """Tests for log configuration."""

    @pytest.fixture
    def root_logger(self):
        """Restore the root logger after a command reconfigures it."""
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield root
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_log_level_applies_to_every_command(
        self, root_logger: logging.Logger, tmp_markdown_file: Path, monkeypatch: pytest.MonkeyPatch
    ):
        """Test that PINNIPED_LOG_LEVEL is honored outside of convert."""
        monkeypatch.setenv("PINNIPED_LOG_LEVEL", "DEBUG")
        config.load_settings()

        result = runner.invoke(app, ["info", str(tmp_markdown_file)])

        assert result.exit_code == 0
        assert root_logger.level == logging.DEBUG
        assert any(isinstance(h, RichHandler) for h in root_logger.handlers)
