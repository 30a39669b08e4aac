"""Clients for Chinese stock, fund and index market-data services."""

__version__ = "0.1.0"