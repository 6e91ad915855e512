"""
Collection Store and grouping/filtering helpers.

The store owns every Record of a loaded export in source order. Everything
shown to the user (the folder subset, the artist groups, the record count)
is derived from it on demand and never cached, so a folder change can always
be undone by switching back.
"""

import logging
from typing import Dict, Iterable, List, Sequence

from catalog.models import ArtistGroup, Record
from catalog.text_utils import artist_sort_key, matches_search

logger = logging.getLogger(__name__)

ALL_FOLDERS = 'all'


class CollectionStore:
    """
    Read-only holder for the records of one collection export.

    Args:
        records: Records in source row order
        headers: Column names from the export header line
    """

    def __init__(self, records: Iterable[Record] = (), headers: Sequence[str] = ()):
        self._records = tuple(records)
        self.headers = list(headers)
        self._folders = sorted({r.collection_folder for r in self._records if r.collection_folder})
        self._by_id: Dict[int, Record] = {r.row_id: r for r in self._records}
        logger.debug(f"CollectionStore holds {len(self._records)} records in {len(self._folders)} folders")

    @property
    def records(self) -> List[Record]:
        return list(self._records)

    @property
    def folders(self) -> List[str]:
        """Distinct non-empty folder names, sorted for display."""
        return list(self._folders)

    @property
    def total(self) -> int:
        return len(self._records)

    def get(self, row_id: int):
        """Return the record with the given row id, or None."""
        return self._by_id.get(row_id)

    def filtered(self, folder: str = ALL_FOLDERS) -> List[Record]:
        """Records in `folder`, or every record for "all"."""
        if folder == ALL_FOLDERS:
            return list(self._records)
        return [r for r in self._records if r.collection_folder == folder]

    def artist_groups(self, folder: str = ALL_FOLDERS) -> List[ArtistGroup]:
        return group_by_artist(self.filtered(folder))

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"CollectionStore(records={len(self._records)}, folders={len(self._folders)})"


def group_by_artist(records: Iterable[Record]) -> List[ArtistGroup]:
    """
    Group records by exact artist string, sorted by artist name.

    No normalization is applied: "The Beatles" and "Beatles, The" are two
    separate groups. Albums keep their source order within a group.
    """
    groups: Dict[str, ArtistGroup] = {}
    for record in records:
        group = groups.get(record.artist)
        if group is None:
            group = groups[record.artist] = ArtistGroup(record.artist)
        group.albums.append(record)
    return sorted(groups.values(), key=lambda g: artist_sort_key(g.artist))


def search_artists(groups: Iterable[ArtistGroup], term: str) -> List[ArtistGroup]:
    """Groups whose artist name contains `term`, ignoring case."""
    return [g for g in groups if matches_search(g.artist, term)]


def record_count_text(store: CollectionStore, folder: str = ALL_FOLDERS) -> str:
    """
    Describe how many records are shown.

    Examples:
        folder "all" with 500 records -> "500 records"
        folder "Shelf A" matching 42 of 500 -> "42 of 500 records"
    """
    total = store.total
    if folder == ALL_FOLDERS:
        return f"{total} records"
    return f"{len(store.filtered(folder))} of {total} records"
