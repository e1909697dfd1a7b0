"""Migration of live vendor data into the local store."""

from .config import STAGE_ORDER, MigrationConfig, MigrationEntities
from .importer import MigrationImporter, check_vendor_connection, mint_vendor_token

__all__ = [
    "MigrationConfig",
    "MigrationEntities",
    "MigrationImporter",
    "STAGE_ORDER",
    "check_vendor_connection",
    "mint_vendor_token",
]
