"""
Action Audit - message templates for structured audit logging

Resolves a human-readable template for a controller path and action name,
substitutes request parameters into it and hands the formatted line to
stdlib logging.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
