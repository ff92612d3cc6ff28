"""Clients and parsers for external data sources."""
