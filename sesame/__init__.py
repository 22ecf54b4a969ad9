"""Pay-per-entry door opener backed by Lightning invoices."""

__version__ = "0.1.0"
