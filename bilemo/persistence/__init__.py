"""
SQLAlchemy persistence layer.
"""
