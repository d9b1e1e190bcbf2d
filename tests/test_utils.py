"""Unit tests for stackgen.utils."""

from __future__ import annotations

import pytest

from stackgen import utils
from stackgen.utils import sanitize_name

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# sanitize_name
# ---------------------------------------------------------------------------


class TestSanitizeName:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("My Shop", "my-shop"),
            ("billing_api", "billing-api"),
            ("  --Weird__Name!!  ", "weird-name"),
            ("already-fine", "already-fine"),
            ("v2.0", "v2-0"),
        ],
    )
    def test_sanitize(self, raw, expected):
        assert sanitize_name(raw) == expected

    def test_only_symbols_becomes_empty(self):
        assert sanitize_name("!!!") == ""


# ---------------------------------------------------------------------------
# Console helpers
# ---------------------------------------------------------------------------


class TestConsoleHelpers:
    def test_markup_in_message_is_escaped(self, capsys):
        utils.print_error("bad [red]value[/red]")
        assert "bad [red]value[/red]" in capsys.readouterr().out

    def test_summary_table(self, capsys):
        utils.print_summary_table({"docker-compose.yml": "written"}, title="Files")
        out = capsys.readouterr().out
        assert "docker-compose.yml" in out
        assert "written" in out

    def test_section_title(self, capsys):
        utils.print_section(".env")
        assert ".env" in capsys.readouterr().out
