"""Domain modules: accounts, catalog, ledger and the operations built on them."""
