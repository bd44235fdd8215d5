"""Shared helpers for the Action Audit test suite."""
