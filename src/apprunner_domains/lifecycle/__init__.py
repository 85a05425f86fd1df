"""Polling and reconciliation of custom domain associations."""

from apprunner_domains.lifecycle.reconciler import Reconciler
from apprunner_domains.lifecycle.waiter import Waiter, WaiterState, WaitResult

__all__ = ["Reconciler", "WaitResult", "Waiter", "WaiterState"]
