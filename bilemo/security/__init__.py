"""
Role-based access control.
"""
