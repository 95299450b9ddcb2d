"""API routers and request/response models."""
