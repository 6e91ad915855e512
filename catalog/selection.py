"""
Selection state machine for the folder -> artist -> album drill-down.

`CatalogBrowser` is the single state container of the browser. It holds the
collection store and the current selection, applies every transition
synchronously, and hands album enrichment off to an `EnrichmentTracker` so a
selection never waits on the network.

Transitions:
    set_folder     any phase -> FOLDER_ONLY (artist, album and search cleared)
    select_artist  FOLDER_ONLY / ARTIST_SELECTED / ALBUM_SELECTED -> ARTIST_SELECTED
    select_album   ARTIST_SELECTED / ALBUM_SELECTED -> ALBUM_SELECTED

Selections that do not belong to the current view are ignored.
"""

import logging
import threading
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Union

from catalog.collection import ALL_FOLDERS, CollectionStore, search_artists
from catalog.exceptions import SelectionPreconditionError
from catalog.models import ArtistGroup, Record

logger = logging.getLogger(__name__)


class Phase(Enum):
    NO_SELECTION = 'no_selection'
    FOLDER_ONLY = 'folder_only'
    ARTIST_SELECTED = 'artist_selected'
    ALBUM_SELECTED = 'album_selected'


@dataclass(frozen=True)
class SelectionState:
    folder: str = ALL_FOLDERS
    artist: Optional[str] = None
    album: Optional[Record] = None
    search: str = ''
    phase: Phase = Phase.NO_SELECTION


class CatalogBrowser:
    """
    State container driving the three browsing panes.

    Args:
        store: Loaded collection; an empty store leaves the browser in
            NO_SELECTION until a folder is chosen
        enrichment: Optional EnrichmentTracker started on album selection

    Transitions hold `lock` across their check-and-update. Hold it while
    projecting a view to read one consistent state.
    """

    def __init__(self, store: Optional[CollectionStore] = None, enrichment=None):
        self.store = store if store is not None else CollectionStore()
        self.enrichment = enrichment
        self.lock = threading.RLock()
        self.state = SelectionState()
        if len(self.store):
            self.set_folder(ALL_FOLDERS)

    # ---- derived views ----

    @property
    def phase(self) -> Phase:
        return self.state.phase

    def filtered_records(self) -> List[Record]:
        return self.store.filtered(self.state.folder)

    def artist_groups(self) -> List[ArtistGroup]:
        return self.store.artist_groups(self.state.folder)

    def visible_artists(self) -> List[ArtistGroup]:
        """Artist groups that pass the current search term."""
        return search_artists(self.artist_groups(), self.state.search)

    def selected_group(self) -> Optional[ArtistGroup]:
        if self.state.artist is None:
            return None
        return next((g for g in self.artist_groups() if g.artist == self.state.artist), None)

    def selected_albums(self) -> List[Record]:
        group = self.selected_group()
        return list(group.albums) if group else []

    # ---- transitions ----

    def set_folder(self, folder: str) -> None:
        """Switch folder; always collapses artist and album selection."""
        with self.lock:
            self.state = SelectionState(folder=folder, phase=Phase.FOLDER_ONLY)
            self._clear_enrichment()
        logger.debug(f"Folder set to '{folder}' ({len(self.filtered_records())} records)")

    def select_artist(self, artist: str) -> None:
        """
        Select an artist of the current folder and clear the album.

        Raises:
            SelectionPreconditionError: If nothing is loaded or the artist
                has no group in the current folder
        """
        with self.lock:
            if self.state.phase == Phase.NO_SELECTION:
                raise SelectionPreconditionError("No folder selected")
            if not any(g.artist == artist for g in self.artist_groups()):
                raise SelectionPreconditionError(f"Artist not in current folder: {artist!r}")

            self.state = replace(self.state, artist=artist, album=None, phase=Phase.ARTIST_SELECTED)
            self._clear_enrichment()

    def select_album(self, album: Record) -> None:
        """
        Select one of the selected artist's albums and start enrichment.

        Raises:
            SelectionPreconditionError: If no artist is selected or the album
                does not belong to the selected artist's group
        """
        with self.lock:
            if self.state.phase not in (Phase.ARTIST_SELECTED, Phase.ALBUM_SELECTED):
                raise SelectionPreconditionError("No artist selected")
            if album not in self.selected_albums():
                raise SelectionPreconditionError(
                    f"Album not in selected artist's group: {album.artist} - {album.title}"
                )

            self.state = replace(self.state, album=album, phase=Phase.ALBUM_SELECTED)
            if self.enrichment is not None:
                self.enrichment.start(album)

    def search(self, term: str) -> None:
        """Narrow the displayed artists; never touches counts or selection."""
        with self.lock:
            self.state = replace(self.state, search=term or '')

    def _clear_enrichment(self) -> None:
        if self.enrichment is not None:
            self.enrichment.clear()

    # ---- command dispatch ----

    def on_folder_change(self, name: str) -> bool:
        self.set_folder(name or ALL_FOLDERS)
        return True

    def on_artist_select(self, artist_id: str) -> bool:
        try:
            self.select_artist(artist_id)
        except SelectionPreconditionError as e:
            logger.debug(f"Ignoring artist selection: {e}")
            return False
        return True

    def on_album_select(self, album_id: Union[int, str]) -> bool:
        try:
            row_id = int(album_id)
        except (TypeError, ValueError):
            logger.debug(f"Ignoring album selection with invalid id: {album_id!r}")
            return False

        album = self.store.get(row_id)
        if album is None:
            logger.debug(f"Ignoring album selection for unknown id: {row_id}")
            return False
        try:
            self.select_album(album)
        except SelectionPreconditionError as e:
            logger.debug(f"Ignoring album selection: {e}")
            return False
        return True

    def on_search(self, term: str) -> bool:
        self.search(term)
        return True

    def __repr__(self) -> str:
        return (
            f"CatalogBrowser(phase={self.state.phase.value}, folder={self.state.folder!r}, "
            f"artist={self.state.artist!r})"
        )
