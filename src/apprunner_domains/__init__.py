"""Reconcile App Runner custom domain associations."""

__version__ = "0.1.0"
