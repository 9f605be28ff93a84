"""Reconciliation engine: delta detection, statement building and execution."""
