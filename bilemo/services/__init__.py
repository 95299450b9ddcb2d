"""
Application services shared by the API routers.
"""
