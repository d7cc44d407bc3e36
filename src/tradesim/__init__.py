"""Trading simulator ledger: simulated accounts, orders, prices and achievements."""

__version__ = "0.1.0"
