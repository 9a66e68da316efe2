"""Coin shop core: purchases, peer transfers and account history over a durable ledger."""

__version__ = "0.1.0"
