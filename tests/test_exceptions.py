"""
Unit tests for catalog/exceptions.py
"""
import pytest

from catalog.exceptions import (
    CatalogError,
    ConfigurationError,
    DiscogsAPIError,
    LoadError,
    LookupFailure,
    SelectionPreconditionError,
    WikipediaAPIError,
)


class TestExceptionHierarchy:

    @pytest.mark.unit
    @pytest.mark.parametrize("exc_class", [
        LoadError, LookupFailure, DiscogsAPIError, WikipediaAPIError,
        SelectionPreconditionError, ConfigurationError,
    ])
    def test_all_derive_from_catalog_error(self, exc_class):
        assert issubclass(exc_class, CatalogError)

    @pytest.mark.unit
    def test_lookup_errors_share_a_base(self):
        assert issubclass(DiscogsAPIError, LookupFailure)
        assert issubclass(WikipediaAPIError, LookupFailure)
        assert not issubclass(LoadError, LookupFailure)

    @pytest.mark.unit
    def test_catching_base_catches_lookup_error(self):
        with pytest.raises(LookupFailure) as exc_info:
            raise WikipediaAPIError("no query block")
        assert "no query block" in str(exc_info.value)
