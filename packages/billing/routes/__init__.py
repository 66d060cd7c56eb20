"""Billing API routes."""

from packages.billing.routes import webhooks, plans

__all__ = ["webhooks", "plans"]
