"""Creem webhook handling."""
