"""HTTP surface for the expense ledger."""
