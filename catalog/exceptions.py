"""
Custom exception hierarchy for the vinyl collection browser.

This module defines domain-specific exceptions so that loading, lookup and
selection problems can be told apart and handled where they belong.
"""


class CatalogError(Exception):
    """Base exception for all collection browser errors."""
    pass


class LoadError(CatalogError):
    """The collection source could not be reached or read."""
    pass


class LookupFailure(CatalogError):
    """Base class for external metadata lookup errors."""
    pass


class DiscogsAPIError(LookupFailure):
    """Error communicating with the Discogs API."""
    pass


class WikipediaAPIError(LookupFailure):
    """Error communicating with the Wikipedia API."""
    pass


class SelectionPreconditionError(CatalogError):
    """An artist or album was selected that is not part of the current view."""
    pass


class ConfigurationError(CatalogError):
    """Configuration error (missing or invalid settings)."""
    pass
