"""
Domain layer - enums and request/response schemas.
"""

from domain import enums, schemas

__all__ = ["enums", "schemas"]
