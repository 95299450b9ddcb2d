"""
Configuration package for the BileMo server.
"""
