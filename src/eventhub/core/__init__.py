"""
Domain aggregates, their value objects, error contract, record contracts
and repository interfaces.

Nothing in here talks to storage, payment gateways or notification
transports.
"""
