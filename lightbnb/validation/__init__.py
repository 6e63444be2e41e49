"""Input validation models for the query functions."""

from .models import PropertyCreate, PropertySearchOptions, UserCreate

__all__ = [
    "UserCreate",
    "PropertyCreate",
    "PropertySearchOptions",
]
