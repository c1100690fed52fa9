"""Pytest fixtures for Pinniped tests."""

import pytest
from pathlib import Path

from pinniped import config


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch: pytest.MonkeyPatch):
    """Start every test from default settings, ignoring any local .env."""
    for name in (
        "PINNIPED_OUTPUT_FORMAT",
        "PINNIPED_JSON_INDENT",
        "PINNIPED_ENCODING",
        "PINNIPED_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "_settings", config.Settings(_env_file=None))
    yield
    config._settings = None


@pytest.fixture
def sample_markdown() -> str:
    """A document using every supported block type."""
    return (
        "# My Document\n\n"
        "This is a **paragraph** with *formatting*.\n\n"
        "## Code Example\n\n"
        "```rust\nfn hello() {\n    println!(\"Hello!\");\n}\n```\n\n"
        "> This is a quote\n\n"
        "- List item 1\n- List item 2\n\n"
        "1. First\n2. Second\n\n"
        "|Col1|Col2|\n|---|---|\n|A|B|"
    )


@pytest.fixture
def table_markdown() -> str:
    """A table with a header row and two data rows."""
    return "|Name|Age|\n|---|---|\n|John|25|\n|Jane|30|"


@pytest.fixture
def tmp_markdown_file(tmp_path: Path, sample_markdown: str) -> Path:
    """Create a temporary Markdown file for testing."""
    file_path = tmp_path / "notes.md"
    file_path.write_text(sample_markdown, encoding="utf-8")
    return file_path


@pytest.fixture
def tmp_table_file(tmp_path: Path, table_markdown: str) -> Path:
    """Create a temporary Markdown file holding only a table."""
    file_path = tmp_path / "people.md"
    file_path.write_text(table_markdown, encoding="utf-8")
    return file_path
