"""Binding and content logic. No FastAPI/Starlette imports below this package."""
