"""
Models package for the BileMo persistence layer.

Catalog and account models are split into two modules and re-exported here
so callers can simply use models.Product, models.Customer, and so on.
"""

from .catalog import Image, Product
from .accounts import Customer, CustomerUser, Employee, User

__all__ = [
    # Catalog models
    "Product",
    "Image",
    # Account models
    "Customer",
    "CustomerUser",
    "Employee",
    "User",
]
