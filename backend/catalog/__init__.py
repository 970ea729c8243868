"""Label Catalog - music label catalog service."""

__version__ = "0.1.0"
