"""Label Catalog CLI."""
