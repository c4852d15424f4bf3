"""Async client for the Jito block engine JSON-RPC API, with bundle-tracking helpers."""

__version__ = "0.3.2"

__all__ = ["__version__"]