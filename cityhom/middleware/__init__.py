"""
Middleware package for the CityHom API.
"""

from .validation import ValidationMiddleware

__all__ = ["ValidationMiddleware"]
