"""
Shared utilities for the BileMo server.
"""
