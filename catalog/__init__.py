"""
Vinyl Collection Browser Library

Core modules for parsing a collection export, browsing it by folder, artist
and album, and enriching albums from Discogs and Wikipedia.
"""

__version__ = "1.0.0"
__author__ = "Vinyl Collection Browser Contributors"

from .config_manager import Config
from .collection import CollectionStore
from .csv_parser import parse_collection, read_collection
from .enrichment import EnrichmentResolver, EnrichmentTracker
from .models import Record
from .selection import CatalogBrowser
from .view_model import build_view_model

__all__ = [
    'Config',
    'CollectionStore',
    'parse_collection',
    'read_collection',
    'EnrichmentResolver',
    'EnrichmentTracker',
    'Record',
    'CatalogBrowser',
    'build_view_model',
]
