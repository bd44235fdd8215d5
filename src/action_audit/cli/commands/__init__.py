"""Top-level ``action-audit`` commands (one module per command)."""
