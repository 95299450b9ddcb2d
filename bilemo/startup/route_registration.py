"""
Route registration for the BileMo API.
"""

from fastapi import FastAPI

from bilemo.api import auth, customer, customer_user, employee, image, product
from bilemo.utils.verbosity_logger import get_logger

logger = get_logger("bilemo.startup.routes")


def register_routes(app: FastAPI):
    """
    Register all API routes with the FastAPI application, under /api.

    Args:
        app: The FastAPI application instance
    """
    app.include_router(auth.router, prefix="/api")  # /api/login_check
    app.include_router(product.router, prefix="/api")
    app.include_router(image.router, prefix="/api")
    app.include_router(customer.router, prefix="/api")
    app.include_router(customer_user.router, prefix="/api")
    app.include_router(employee.router, prefix="/api")
    logger.info("API routes registered")
