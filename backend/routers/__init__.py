"""
Routers package
FastAPI route handlers organized by domain
"""
from . import addons
from . import concepts

__all__ = [
    "addons",
    "concepts",
]
