"""Advance ledger command line interface.

Provides operational tools for:
- Granting advances
- Recovering advances through payroll deductions
- Balance, history and deduction queries
- Ledger-wide totals

Usage:
    python -m payroll_advances.cli grant --employee-id EMP001 --amount 500 --reason emergency
    python -m payroll_advances.cli deduct --employee-id EMP001 --amount 200 --payroll-id PR001
    python -m payroll_advances.cli balance --employee-id EMP001
    python -m payroll_advances.cli history --employee-id EMP001
    python -m payroll_advances.cli deductions [--employee-id EMP001]
    python -m payroll_advances.cli totals

Output is JSON on stdout. Pass --storage-path to use a specific ledger file;
otherwise the configured storage backend is used.
"""

from __future__ import annotations

import argparse
import json
import sys
from decimal import Decimal
from typing import Any, Callable

from pydantic import ValidationError

from payroll_advances.api.schemas import (
    AdvanceResponse,
    ApplyDeductionRequest,
    DeductionResponse,
    GrantAdvanceRequest,
)
from payroll_advances.config import configure_logging, get_settings
from payroll_advances.ledger import (
    AdvanceLedger,
    JsonFileKeyValueStore,
    LedgerStorage,
    create_key_value_store,
)


def _json_default(obj: Any) -> Any:
    if isinstance(obj, Decimal):
        return str(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


class AdvanceCli:
    """Advance ledger Command Line Interface."""

    def __init__(self, ledger: AdvanceLedger | None = None) -> None:
        self.parser = self._build_parser()
        self._ledger = ledger

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="payroll-advances",
            description="Salary advance ledger tools",
        )
        parser.add_argument(
            "--storage-path",
            type=str,
            help="Ledger JSON file (default: configured storage backend)",
        )
        parser.add_argument(
            "--log-level",
            type=str,
            default=None,
            help="Logging level (default: $LOG_LEVEL or INFO)",
        )
        subparsers = parser.add_subparsers(dest="command", help="Commands")

        # grant command
        grant = subparsers.add_parser("grant", help="Grant an advance to an employee")
        grant.add_argument("--employee-id", required=True, help="Employee identifier")
        grant.add_argument("--amount", required=True, help="Advance amount")
        grant.add_argument("--reason", required=True, help="Reason for the advance")

        # deduct command
        deduct = subparsers.add_parser(
            "deduct",
            help="Recover advances through a payroll deduction",
        )
        deduct.add_argument("--employee-id", required=True, help="Employee identifier")
        deduct.add_argument("--amount", required=True, help="Amount to recover")
        deduct.add_argument("--payroll-id", required=True, help="Payroll run identifier")

        # balance command
        balance = subparsers.add_parser("balance", help="Show outstanding advance balance")
        balance.add_argument("--employee-id", required=True, help="Employee identifier")

        # history command
        history = subparsers.add_parser("history", help="List an employee's advances")
        history.add_argument("--employee-id", required=True, help="Employee identifier")

        # deductions command
        deductions = subparsers.add_parser("deductions", help="List deduction records")
        deductions.add_argument("--employee-id", help="Only this employee's deductions")

        # totals command
        subparsers.add_parser("totals", help="Show totals across all employees")

        return parser

    def _get_ledger(self, args: argparse.Namespace) -> AdvanceLedger:
        if self._ledger is None:
            if args.storage_path:
                store = JsonFileKeyValueStore(args.storage_path)
            else:
                store = create_key_value_store(get_settings())
            self._ledger = AdvanceLedger(LedgerStorage(store))
        return self._ledger

    def _print(self, payload: Any) -> None:
        print(json.dumps(payload, indent=2, default=_json_default))

    def run(
        self,
        args: list[str] | None = None,
        default_log_level: str | None = None,
    ) -> int:
        """Run the CLI with given arguments.

        Logging is configured once, from --log-level or else
        ``default_log_level``; with neither it is left untouched.
        """
        parsed = self.parser.parse_args(args)

        if not parsed.command:
            self.parser.print_help()
            return 1

        log_level = parsed.log_level or default_log_level
        if log_level:
            configure_logging(log_level)

        # Dispatch to command handler
        handlers: dict[str, Callable[..., int]] = {
            "grant": self._cmd_grant,
            "deduct": self._cmd_deduct,
            "balance": self._cmd_balance,
            "history": self._cmd_history,
            "deductions": self._cmd_deductions,
            "totals": self._cmd_totals,
        }

        handler = handlers.get(parsed.command)
        if handler:
            try:
                return handler(parsed)
            except ValidationError as e:
                for error in e.errors():
                    field = ".".join(str(part) for part in error["loc"])
                    print(f"ERROR: {field}: {error['msg']}", file=sys.stderr)
                return 2

        print(f"Unknown command: {parsed.command}", file=sys.stderr)
        return 1

    def _cmd_grant(self, args: argparse.Namespace) -> int:
        """Grant an advance."""
        request = GrantAdvanceRequest(
            employee_id=args.employee_id,
            amount=args.amount,
            reason=args.reason,
        )
        advance = self._get_ledger(args).grant_advance(
            request.employee_id, request.amount, request.reason
        )
        self._print(AdvanceResponse.model_validate(advance).model_dump(mode="json"))
        return 0

    def _cmd_deduct(self, args: argparse.Namespace) -> int:
        """Apply a payroll deduction against outstanding advances."""
        request = ApplyDeductionRequest(
            employee_id=args.employee_id,
            payroll_id=args.payroll_id,
            deduction_amount=args.amount,
        )
        deduction = self._get_ledger(args).apply_deduction(
            request.employee_id, request.deduction_amount, request.payroll_id
        )
        self._print(DeductionResponse.model_validate(deduction).model_dump(mode="json"))
        return 0

    def _cmd_balance(self, args: argparse.Namespace) -> int:
        """Show an employee's outstanding balance."""
        balance = self._get_ledger(args).get_outstanding_balance(args.employee_id)
        self._print({"employee_id": args.employee_id, "outstanding_balance": balance})
        return 0

    def _cmd_history(self, args: argparse.Namespace) -> int:
        """List an employee's advances."""
        advances = self._get_ledger(args).get_history(args.employee_id)
        self._print([AdvanceResponse.model_validate(a).model_dump(mode="json") for a in advances])
        return 0

    def _cmd_deductions(self, args: argparse.Namespace) -> int:
        """List deduction records."""
        deductions = self._get_ledger(args).get_deductions(args.employee_id)
        self._print(
            [DeductionResponse.model_validate(d).model_dump(mode="json") for d in deductions]
        )
        return 0

    def _cmd_totals(self, args: argparse.Namespace) -> int:
        """Show ledger-wide totals."""
        ledger = self._get_ledger(args)
        self._print({
            "total_advances_given": ledger.get_total_advances_given(),
            "total_outstanding_advances": ledger.get_total_outstanding_advances(),
        })
        return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    cli = AdvanceCli()
    return cli.run(argv, default_log_level=get_settings().log_level)


if __name__ == "__main__":
    sys.exit(main())
