"""Tests for the advance ledger CLI."""

import json
import logging
from decimal import Decimal

import pytest

from payroll_advances.cli import AdvanceCli, main
from payroll_advances.config import get_settings
from payroll_advances.ledger import AdvanceLedger


def run_cli(capsys, cli: AdvanceCli, *args: str) -> tuple[int, object]:
    code = cli.run(list(args))
    out = capsys.readouterr().out
    return code, json.loads(out) if out.strip() else None


class TestCliCommands:
    """Test CLI commands against an injected ledger."""

    def test_grant_and_balance(self, capsys, ledger: AdvanceLedger):
        cli = AdvanceCli(ledger)

        code, advance = run_cli(
            capsys, cli, "grant", "--employee-id", "E1", "--amount", "500", "--reason", "emergency"
        )
        assert code == 0
        assert advance["employee_id"] == "E1"
        assert advance["status"] == "approved"
        assert advance["date"] == "2024-01-10"

        code, balance = run_cli(capsys, cli, "balance", "--employee-id", "E1")
        assert code == 0
        assert Decimal(balance["outstanding_balance"]) == Decimal("500")

    def test_deduct_history_and_totals(self, capsys, ledger: AdvanceLedger):
        ledger.grant_advance("E1", Decimal("200"), "emergency")
        cli = AdvanceCli(ledger)

        code, deduction = run_cli(
            capsys, cli, "deduct", "--employee-id", "E1", "--amount", "500", "--payroll-id", "PR002"
        )
        assert code == 0
        assert Decimal(deduction["deduction_amount"]) == Decimal("500")
        assert Decimal(deduction["applied_amount"]) == Decimal("200")

        code, history = run_cli(capsys, cli, "history", "--employee-id", "E1")
        assert [Decimal(a["remaining_balance"]) for a in history] == [Decimal("0")]

        code, deductions = run_cli(capsys, cli, "deductions")
        assert [d["payroll_id"] for d in deductions] == ["PR002"]

        code, totals = run_cli(capsys, cli, "totals")
        assert Decimal(totals["total_advances_given"]) == Decimal("200")
        assert Decimal(totals["total_outstanding_advances"]) == Decimal("0")

    @pytest.mark.parametrize("amount", ["0", "-5", "abc", "1.234"])
    def test_grant_rejects_invalid_amount(self, capsys, ledger: AdvanceLedger, amount: str):
        """Invalid input exits with status 2 and leaves the ledger unchanged."""
        cli = AdvanceCli(ledger)

        code = cli.run(["grant", "--employee-id", "E1", "--amount", amount, "--reason", "x"])

        assert code == 2
        assert "amount" in capsys.readouterr().err
        assert ledger.get_history("E1") == []

    def test_blank_employee_rejected(self, capsys, ledger: AdvanceLedger):
        cli = AdvanceCli(ledger)

        code = cli.run(["deduct", "--employee-id", "  ", "--amount", "5", "--payroll-id", "PR1"])

        assert code == 2
        assert "employee_id" in capsys.readouterr().err

    def test_no_command_prints_help(self, capsys):
        assert AdvanceCli().run([]) == 1
        assert "usage" in capsys.readouterr().out


class TestCliStoragePath:
    """Test the --storage-path option."""

    def test_storage_path_persists_between_runs(self, capsys, tmp_path):
        path = str(tmp_path / "ledger.json")

        AdvanceCli().run(["--storage-path", path, "grant", "--employee-id", "E1",
                          "--amount", "250.75", "--reason", "housing"])
        capsys.readouterr()

        code, balance = run_cli(capsys, AdvanceCli(), "--storage-path", path,
                                "balance", "--employee-id", "E1")
        assert code == 0
        assert Decimal(balance["outstanding_balance"]) == Decimal("250.75")


@pytest.fixture
def root_logger(monkeypatch):
    """Root logger restored after the test, with settings read from a clean environment."""
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("STORAGE_BACKEND", raising=False)
    monkeypatch.setattr("payroll_advances.config.load_dotenv", lambda: None)
    get_settings.cache_clear()

    root = logging.getLogger()
    level, handlers = root.level, root.handlers[:]
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    get_settings.cache_clear()


class TestCliLogging:
    """Test how the entry point configures logging."""

    def test_log_level_flag_overrides_settings(self, capsys, tmp_path, root_logger):
        """--log-level wins over the configured LOG_LEVEL."""
        path = str(tmp_path / "ledger.json")

        code = main(["--storage-path", path, "--log-level", "WARNING", "totals"])

        assert code == 0
        assert root_logger.level == logging.WARNING
        capsys.readouterr()

    def test_settings_log_level_used_without_flag(
        self, capsys, tmp_path, monkeypatch, root_logger
    ):
        """Without the flag the LOG_LEVEL setting applies."""
        monkeypatch.setenv("LOG_LEVEL", "error")
        path = str(tmp_path / "ledger.json")

        code = main(["--storage-path", path, "totals"])

        assert code == 0
        assert root_logger.level == logging.ERROR
        capsys.readouterr()
