"""Exceptions raised by the assortment core and its product sources."""
from __future__ import annotations


class AssortmentError(Exception):
    """Base class for assortment errors."""


class InvalidArgument(AssortmentError, ValueError):
    """A required argument was missing or had the wrong shape."""


class CatalogUnavailable(AssortmentError, RuntimeError):
    """No product data could be read, so no index can be served."""
