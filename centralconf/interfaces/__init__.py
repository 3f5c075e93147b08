"""Interfaces layer - HTTP/CLI presentation over services."""
