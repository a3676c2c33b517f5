"""Workflow services."""
from .checkout_orchestrator import CheckoutOrchestrator

__all__ = ["CheckoutOrchestrator"]
