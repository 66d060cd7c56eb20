"""Billing utilities."""
