"""Application – token lifecycle, ledger and dispatch use cases."""
