"""HTTP API for the advance ledger."""
