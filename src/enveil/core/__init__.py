"""Shared data model, errors, redaction and tree walking for Enveil."""
