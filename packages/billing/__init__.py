"""
Billing package - reconciles Creem payment events with local billing state.

This package integrates with:
- Creem: one-time checkouts and recurring subscriptions, delivered as webhooks

Local state kept in sync: credit usage, user subscriptions and payment history.
"""
