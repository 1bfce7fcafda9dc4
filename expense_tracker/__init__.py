"""Console entry points for the expense ledger."""
