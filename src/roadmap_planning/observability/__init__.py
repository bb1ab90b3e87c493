"""Observability: structured logging and trace correlation."""
