"""Business logic services."""
from catalog.services.auth import AuthService
from catalog.services.roles import RoleService
from catalog.services.catalog import CatalogService
from catalog.services.standalone import StandaloneTrackService
from catalog.services.artwork import ArtworkStorage

__all__ = [
    "AuthService",
    "RoleService",
    "CatalogService",
    "StandaloneTrackService",
    "ArtworkStorage",
]
