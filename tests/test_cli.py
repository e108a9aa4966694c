"""Tests for the TradeGuard command line.

**Feature: tradeguard**
"""

import tempfile
from pathlib import Path

import pytest
import toml
from click.testing import CliRunner

from tradeguard.cli import cli

JOURNAL = """
[[accounts]]
id = "apex-1"
name = "Apex 50K"
initial_balance = 50000
max_drawdown = 2500
drawdown_type = "Trailing"

[accounts.risk_settings]
max_daily_risk = 500
max_trades_per_day = 2

[[trades]]
id = "t-002"
account_id = "apex-1"
date = 2024-03-05
pnl_net = -500
status = "LOSS"
discipline_score = 4

[[trades]]
id = "t-001"
account_id = "apex-1"
date = 2024-03-04
pnl_net = 1200
status = "WIN"
discipline_score = 5
notes = "Clean breakout retest, held to target."

[preps.2024-03-05]
gk_hrv_value = 45
gk_hrv_baseline = 45
gk_sleep_hours = 8
gk_physical_energy = 8
gk_mental_clarity = 8
gk_emotional_calm = 8
gk_process_confidence = 8
"""


@pytest.fixture
def journal():
    """Write a journal snapshot to a temporary file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "journal.toml"
        path.write_text(JOURNAL)
        yield path


@pytest.fixture
def runner():
    return CliRunner(env={"COLUMNS": "200"})


class TestCommandListing:
    """Tests for the lazily loaded command group."""

    def test_help_lists_commands(self, runner: CliRunner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for name in ("size", "drawdown", "throttle", "gate", "tilt", "be", "score", "project"):
            assert name in result.output

    def test_unknown_command(self, runner: CliRunner):
        result = runner.invoke(cli, ["nope"])
        assert result.exit_code != 0


class TestGate:
    """Tests for the readiness gate command."""

    def test_readings_from_options(self, runner: CliRunner):
        result = runner.invoke(cli, [
            "gate", "--hrv", "45", "--baseline", "45", "--sleep", "8",
            "--physical", "8", "--mental", "8", "--emotional", "8", "--process", "8",
        ])

        assert result.exit_code == 0
        assert "96/100" in result.output
        assert "GREEN" in result.output
        assert "CLEARED TO DEPLOY" in result.output

    def test_red_blocks(self, runner: CliRunner):
        result = runner.invoke(cli, ["gate", "--hrv", "30", "--baseline", "45", "--sleep", "4"])

        assert result.exit_code == 0
        assert "RED" in result.output
        assert "DEPLOY BLOCKED" in result.output

    def test_prep_from_journal(self, runner: CliRunner, journal: Path):
        result = runner.invoke(cli, ["gate", "--journal", str(journal), "--date", "2024-03-05"])

        assert result.exit_code == 0
        assert "96/100" in result.output

    def test_missing_prep(self, runner: CliRunner, journal: Path):
        result = runner.invoke(cli, ["gate", "--journal", str(journal), "--date", "2024-03-04"])

        assert result.exit_code == 1
        assert "No prep record" in result.output


class TestRiskCommands:
    """Tests for sizing, drawdown and throttle."""

    def test_size(self, runner: CliRunner, journal: Path):
        result = runner.invoke(cli, ["size", "--journal", str(journal)])

        assert result.exit_code == 0
        assert "Apex 50K" in result.output
        assert "MNQ" in result.output

    def test_size_instrument_override(self, runner: CliRunner, journal: Path):
        result = runner.invoke(cli, ["size", "--journal", str(journal), "--instrument", "es"])

        assert result.exit_code == 0
        assert "ES" in result.output
        assert "MNQ" not in result.output

    def test_size_rejects_unknown_instrument(self, runner: CliRunner, journal: Path):
        result = runner.invoke(cli, ["size", "--journal", str(journal), "--instrument", "XYZ"])
        assert result.exit_code == 2

    def test_drawdown(self, runner: CliRunner, journal: Path):
        result = runner.invoke(cli, ["drawdown", "--journal", str(journal), "--date", "2024-03-05"])

        assert result.exit_code == 0
        assert "51,200.00" in result.output
        assert "48,700.00" in result.output

    def test_throttle_dry_run_writes_nothing(self, runner: CliRunner, journal: Path):
        result = runner.invoke(cli, ["throttle", "--journal", str(journal), "--account", "apex-1"])

        assert result.exit_code == 0
        assert "$200" in result.output
        assert "--apply" in result.output
        assert toml.load(journal)["accounts"][0]["risk_settings"]["max_daily_risk"] == 500

    def test_throttle_apply(self, runner: CliRunner, journal: Path):
        result = runner.invoke(
            cli, ["throttle", "--journal", str(journal), "--account", "Apex 50K", "--apply"]
        )

        assert result.exit_code == 0
        assert "updated" in result.output
        assert toml.load(journal)["accounts"][0]["risk_settings"]["max_daily_risk"] == 200

        again = runner.invoke(cli, ["throttle", "--journal", str(journal), "--account", "apex-1"])
        assert "already matches" in again.output

    def test_unknown_account(self, runner: CliRunner, journal: Path):
        result = runner.invoke(cli, ["throttle", "--journal", str(journal), "--account", "nope"])

        assert result.exit_code == 1
        assert "Account not found" in result.output

    def test_missing_journal(self, runner: CliRunner):
        with tempfile.TemporaryDirectory() as tmpdir:
            result = runner.invoke(cli, ["size", "--journal", str(Path(tmpdir) / "none.toml")])

        assert result.exit_code == 1
        assert "not found" in result.output

    @pytest.mark.parametrize(
        "args",
        [["score"], ["gate"], ["tilt"]],
    )
    def test_invalid_prep_date(self, runner: CliRunner, args: list[str]):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "journal.toml"
            path.write_text(JOURNAL + "\n[preps.yesterday]\ngk_hrv_value = 45\n")
            result = runner.invoke(cli, args + ["--journal", str(path), "--date", "2024-03-05"])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Invalid prep date" in result.output


class TestDisciplineCommands:
    """Tests for tilt, behavioral equity, TG score and projection output."""

    def test_tilt(self, runner: CliRunner, journal: Path):
        result = runner.invoke(
            cli, ["tilt", "--journal", str(journal), "--account", "apex-1", "--date", "2024-03-05"]
        )

        # 500 / 500 * 50 + one loss, prep filed
        assert result.exit_code == 0
        assert "65/100" in result.output
        assert "FRICTION" in result.output

    def test_be(self, runner: CliRunner, journal: Path):
        result = runner.invoke(cli, ["be", "--journal", str(journal)])

        assert result.exit_code == 0
        assert "60/100" in result.output
        assert "BUILDER" in result.output

    def test_score(self, runner: CliRunner, journal: Path):
        result = runner.invoke(cli, ["score", "--journal", str(journal), "--date", "2024-03-05", "--days", "3"])

        assert result.exit_code == 0
        assert "Sentinel Audit" in result.output
        assert "03-05" in result.output

    def test_project(self, runner: CliRunner, journal: Path):
        result = runner.invoke(
            cli, ["project", "--journal", str(journal), "--account", "apex-1", "--win-rate", "55", "--days", "5"]
        )

        assert result.exit_code == 0
        assert "53,000.00" in result.output
        assert "Consistency rule" in result.output
