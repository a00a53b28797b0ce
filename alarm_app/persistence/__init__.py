"""Catalogue persistence."""

from .catalogue_store import CatalogueStore, StoredCatalogue

__all__ = ["CatalogueStore", "StoredCatalogue"]
