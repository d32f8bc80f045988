"""Tests for CLI input parsing and commands.

**Feature: sltp-journal**
"""

import json
from datetime import date

import pytest
from click.testing import CliRunner
from hypothesis import given, settings
from hypothesis import strategies as st

from sltp.cli.main import cli
from sltp.cli.parsing import parse_amount, parse_day
from sltp.config import load_settings
from sltp.db.store import JournalStore


class TestParseAmount:
    """
    **Feature: sltp-journal, Property: Amount Expressions**

    Amounts are a number or a flat sum/difference of numbers.
    """

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("150", 150.0),
            ("12.5", 12.5),
            ("-45", -45.0),
            ("100+50-20", 130.0),
            (" 100 + 50 - 20 ", 130.0),
            (".5+1", 1.5),
            ("+7", 7.0),
        ],
    )
    def test_valid(self, text: str, expected: float):
        assert parse_amount(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["", "abc", "10*2", "1e3", "100+", "--5", "5 5"])
    def test_invalid(self, text: str):
        with pytest.raises(ValueError):
            parse_amount(text)

    @given(
        terms=st.lists(st.integers(min_value=-10000, max_value=10000), min_size=1, max_size=8)
    )
    @settings(max_examples=100)
    def test_sum_of_integers(self, terms: list[int]):
        """
        *For any* list of integers written as a +/- chain, the parsed
        amount is their sum.
        """
        text = str(terms[0]) + "".join(f"{t:+d}" for t in terms[1:])

        assert parse_amount(text) == pytest.approx(sum(terms))


class TestParseDay:
    """Date arguments."""

    def test_today(self):
        assert parse_day("today", today=date(2025, 12, 2)) == date(2025, 12, 2)
        assert parse_day("TODAY", today=date(2025, 12, 2)) == date(2025, 12, 2)

    def test_iso(self):
        assert parse_day("2025-12-02") == date(2025, 12, 2)

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_day("12/02/2025")


@pytest.fixture
def runner(tmp_path):
    """CliRunner whose journal lives in a temp directory."""
    runner = CliRunner(env={"SLTP_HOME": str(tmp_path)})
    runner.home = tmp_path
    return runner


def _store(runner) -> JournalStore:
    return JournalStore(runner.home / "journal.db")


class TestEntryCommands:
    """Logging, listing and deleting entries."""

    def test_add_trade(self, runner):
        result = runner.invoke(
            cli, ["add", "btc/usd", "long", "--pnl", "100+50", "--fee", "2.5", "--date", "2025-12-02"]
        )

        assert result.exit_code == 0, result.output
        assert "Trade Logged" in result.output

        stored = _store(runner).get_entries()
        assert len(stored) == 1
        assert stored[0].pair == "BTC/USD"
        assert stored[0].pnl == 150.0
        assert stored[0].fee == 2.5
        assert stored[0].date == date(2025, 12, 2)

    def test_add_negative_pnl(self, runner):
        result = runner.invoke(
            cli, ["add", "ETH/USD", "short", "--pnl", "-45", "--date", "2025-12-10"]
        )

        assert result.exit_code == 0, result.output
        assert _store(runner).get_entries()[0].pnl == -45.0

    def test_bad_amount_is_usage_error(self, runner):
        result = runner.invoke(cli, ["add", "BTC/USD", "long", "--pnl", "10*2"])

        assert result.exit_code == 2
        assert _store(runner).get_entries() == []

    def test_withdrawal_pair_rejected_for_add(self, runner):
        result = runner.invoke(cli, ["add", "withdrawal", "long", "--pnl", "10"])

        assert result.exit_code == 1
        assert _store(runner).get_entries() == []

    def test_withdraw(self, runner):
        result = runner.invoke(cli, ["withdraw", "500", "--date", "2025-12-31"])

        assert result.exit_code == 0, result.output
        entry = _store(runner).get_entries()[0]
        assert entry.is_withdrawal
        assert entry.pnl == -500.0

    def test_withdraw_zero_rejected(self, runner):
        result = runner.invoke(cli, ["withdraw", "0"])

        assert result.exit_code == 1
        assert _store(runner).get_entries() == []

    def test_list_and_delete(self, runner):
        runner.invoke(cli, ["add", "BTC/USD", "long", "--pnl", "10", "--date", "2025-12-02"])
        entry_id = _store(runner).get_entries()[0].id

        listed = runner.invoke(cli, ["entries"])
        assert listed.exit_code == 0
        assert "Total Entries:" in listed.output

        deleted = runner.invoke(cli, ["delete", entry_id])
        assert deleted.exit_code == 0
        assert _store(runner).get_entries() == []

    def test_edit_trade(self, runner):
        runner.invoke(cli, ["add", "BTC/USD", "long", "--pnl", "10", "--date", "2025-12-02"])
        entry_id = _store(runner).get_entries()[0].id

        result = runner.invoke(
            cli, ["edit", entry_id, "--pnl", "-20", "--fee", "1.5", "--notes", "revised"]
        )

        assert result.exit_code == 0, result.output
        edited = _store(runner).get_entry(entry_id)
        assert edited.pnl == -20.0
        assert edited.fee == 1.5
        assert edited.notes == "revised"
        assert edited.date == date(2025, 12, 2)

    def test_edit_withdrawal_amount(self, runner):
        runner.invoke(cli, ["withdraw", "500", "--date", "2025-12-31"])
        entry_id = _store(runner).get_entries()[0].id

        result = runner.invoke(cli, ["edit", entry_id, "--pnl", "750", "--date", "2026-01-02"])

        assert result.exit_code == 0, result.output
        edited = _store(runner).get_entry(entry_id)
        assert edited.is_withdrawal
        assert edited.pnl == -750.0
        assert edited.date == date(2026, 1, 2)

    @pytest.mark.parametrize("args", [["--fee", "1"], ["--pnl", "0"]])
    def test_edit_withdrawal_rejects_fee_and_zero(self, runner, args):
        runner.invoke(cli, ["withdraw", "500", "--date", "2025-12-31"])
        entry_id = _store(runner).get_entries()[0].id

        result = runner.invoke(cli, ["edit", entry_id, *args])

        assert result.exit_code == 1
        assert _store(runner).get_entry(entry_id).pnl == -500.0

    def test_edit_missing(self, runner):
        result = runner.invoke(cli, ["edit", "does-not-exist", "--pnl", "5"])

        assert result.exit_code == 1

    def test_edit_nothing(self, runner):
        runner.invoke(cli, ["add", "BTC/USD", "long", "--pnl", "10", "--date", "2025-12-02"])
        entry_id = _store(runner).get_entries()[0].id

        result = runner.invoke(cli, ["edit", entry_id])

        assert result.exit_code == 2

    def test_delete_missing(self, runner):
        result = runner.invoke(cli, ["delete", "does-not-exist"])

        assert result.exit_code == 1

    def test_import_skips_known_ids(self, runner):
        path = runner.home / "export.json"
        path.write_text(json.dumps([
            {"id": "a", "pair": "BTC/USD", "direction": "long", "pnl": 10, "fee": 1, "date": "2025-12-01"},
            {"id": "b", "pair": "WITHDRAWAL", "direction": "long", "pnl": -50, "fee": 0, "date": "2025-12-02"},
        ]))

        first = runner.invoke(cli, ["import", str(path)])
        second = runner.invoke(cli, ["import", str(path)])

        assert first.exit_code == 0, first.output
        assert second.exit_code == 0
        assert len(_store(runner).get_entries()) == 2

    def test_import_invalid_file(self, runner):
        path = runner.home / "broken.json"
        path.write_text("{not json")

        result = runner.invoke(cli, ["import", str(path)])

        assert result.exit_code == 1


class TestPortfolioCommands:
    """Summary, calendar, day and stats views."""

    @pytest.fixture(autouse=True)
    def _seed(self, runner):
        runner.invoke(cli, ["add", "BTC/USD", "long", "--pnl", "150", "--fee", "2.5", "--date", "2025-12-02"])
        runner.invoke(cli, ["add", "ETH/USD", "short", "--pnl", "-45", "--fee", "1.5", "--date", "2025-12-10"])

    def test_day(self, runner):
        result = runner.invoke(cli, ["day", "2025-12-02"])

        assert result.exit_code == 0, result.output
        assert "Daily Detail" in result.output
        assert "BTC/USD" in result.output

    def test_empty_day(self, runner):
        result = runner.invoke(cli, ["day", "2025-12-03"])

        assert result.exit_code == 1

    def test_summary(self, runner):
        result = runner.invoke(cli, ["summary", "--month", "12", "--year", "2025"])

        assert result.exit_code == 0, result.output
        assert "December 2025" in result.output

    def test_calendar(self, runner):
        result = runner.invoke(cli, ["calendar", "--month", "12", "--year", "2025"])

        assert result.exit_code == 0, result.output
        assert "Month P&L:" in result.output

    def test_stats(self, runner):
        result = runner.invoke(cli, ["stats", "--curve"])

        assert result.exit_code == 0, result.output
        assert "Trading Statistics" in result.output
        assert "Cumulative P&L" in result.output

    def test_curve_lists_same_day_trades_in_logging_order(self, runner):
        runner.invoke(cli, ["add", "BTC/USD", "long", "--pnl", "10", "--date", "2025-12-31"])
        runner.invoke(cli, ["add", "BTC/USD", "long", "--pnl", "20", "--date", "2025-12-31"])

        result = runner.invoke(cli, ["stats", "--curve"])

        assert result.exit_code == 0, result.output
        # running totals after the seeded 101.00: +111.00 then +131.00
        assert "+$111.00" in result.output
        assert "+$121.00" not in result.output


class TestChallengeCommands:
    """Challenge lifecycle through the CLI."""

    def test_enable_snapshots_today(self, runner):
        result = runner.invoke(cli, ["challenge", "enable", "--target", "12000", "--days", "30"])

        assert result.exit_code == 0, result.output
        loaded = load_settings(runner.home / "config.toml")
        assert loaded.challenge.enabled
        assert loaded.challenge.start_date == date.today()
        assert loaded.challenge.starting_balance == 10000.0

    def test_status_and_disable(self, runner):
        runner.invoke(cli, ["challenge", "enable", "--target", "12000", "--days", "30"])

        status = runner.invoke(cli, ["challenge"])
        assert status.exit_code == 0
        assert "Challenge Progress" in status.output

        disabled = runner.invoke(cli, ["challenge", "disable"])
        assert disabled.exit_code == 0
        assert not load_settings(runner.home / "config.toml").challenge.enabled

    def test_non_positive_target_rejected(self, runner):
        result = runner.invoke(cli, ["challenge", "enable", "--target", "0", "--days", "30"])

        assert result.exit_code == 1


class TestSettingsCommands:
    """Editing settings through the CLI."""

    def test_set_balance(self, runner):
        result = runner.invoke(cli, ["settings", "set", "--balance", "25000", "--theme", "light"])

        assert result.exit_code == 0, result.output
        loaded = load_settings(runner.home / "config.toml")
        assert loaded.beginning_balance == 25000.0
        assert loaded.theme == "light"

    def test_set_nothing(self, runner):
        result = runner.invoke(cli, ["settings", "set"])

        assert result.exit_code == 2

    def test_pair_add_and_remove(self, runner):
        runner.invoke(cli, ["settings", "pair-add", "bnb/usd"])
        assert "BNB/USD" in load_settings(runner.home / "config.toml").pairs

        runner.invoke(cli, ["settings", "pair-remove", "BNB/USD"])
        assert "BNB/USD" not in load_settings(runner.home / "config.toml").pairs
