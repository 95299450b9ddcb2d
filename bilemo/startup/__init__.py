"""Application wiring: logging, CORS, error handlers, routes and lifespan."""
