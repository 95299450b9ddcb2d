"""
BileMo device catalog API.
"""
