"""
Services layer for the POS order API.
"""

from .domain import OrderService

__all__ = ["OrderService"]
