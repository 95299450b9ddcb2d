"""
JWT authentication for the BileMo API.
"""
