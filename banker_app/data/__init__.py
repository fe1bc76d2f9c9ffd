"""
Value objects and payload parsers for balances, transfers and notifications.
"""
