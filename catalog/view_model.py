"""
View-model projection for the browsing panes.

`build_view_model` is a pure function of a `CatalogBrowser`: it reads the
store, the selection and the enrichment tracker, and returns plain
dataclasses a renderer can consume without touching any state.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from catalog.collection import ALL_FOLDERS, record_count_text
from catalog.conditions import classify_condition
from catalog.discogs_client import release_page_url
from catalog.models import Record
from catalog.text_utils import display_or, format_date, matches_search

NO_ARTISTS_MESSAGE = "No artists found"
NO_ARTIST_SELECTED_MESSAGE = "Select an artist to view their albums"
NO_ALBUM_SELECTED_MESSAGE = "Select an album to view details"
LOADING_MESSAGE = "Loading album details..."
NO_COVER_MESSAGE = "Album cover not available"


@dataclass
class FolderOption:
    value: str
    label: str
    selected: bool = False


@dataclass
class ArtistItem:
    name: str
    count: int
    active: bool = False
    visible: bool = True


@dataclass
class AlbumCard:
    id: int
    title: str
    year: str
    label: str
    format: str
    active: bool = False


@dataclass
class Enrichment:
    loading: bool = False
    image_url: Optional[str] = None
    reference_page_url: Optional[str] = None


@dataclass
class AlbumDetail:
    id: int
    title: str
    artist: str
    label: str
    released: str
    format: str
    catalog_number: str
    folder: str
    media_condition: str
    media_condition_class: str
    sleeve_condition: str
    sleeve_condition_class: str
    date_added: str
    notes: Optional[str]
    discogs_url: Optional[str]
    enrichment: Enrichment = field(default_factory=Enrichment)


@dataclass
class ViewModel:
    phase: str
    folder: str
    record_count: str
    search: str
    folders: List[FolderOption]
    artists: List[ArtistItem]
    albums: List[AlbumCard]
    detail: Optional[AlbumDetail]
    artists_message: Optional[str] = None
    albums_message: Optional[str] = None
    detail_message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def folder_options(folders: List[str], current: str) -> List[FolderOption]:
    options = [FolderOption(ALL_FOLDERS, "All Folders", current == ALL_FOLDERS)]
    options.extend(FolderOption(name, name, current == name) for name in folders)
    return options


def album_card(record: Record, active: bool = False) -> AlbumCard:
    return AlbumCard(
        id=record.row_id,
        title=record.title,
        year=display_or(record.released, 'Unknown'),
        label=record.label,
        format=display_or(record.format, 'N/A'),
        active=active,
    )


def album_detail(record: Record, enrichment: Optional[Enrichment] = None) -> AlbumDetail:
    """Detail pane contents for one record."""
    return AlbumDetail(
        id=record.row_id,
        title=record.title,
        artist=record.artist,
        label=record.label,
        released=display_or(record.released, 'Unknown'),
        format=record.format,
        catalog_number=record.catalog_number,
        folder=record.collection_folder,
        media_condition=display_or(record.media_condition, 'Not specified'),
        media_condition_class=classify_condition(record.media_condition),
        sleeve_condition=display_or(record.sleeve_condition, 'Not specified'),
        sleeve_condition_class=classify_condition(record.sleeve_condition),
        date_added=format_date(record.date_added),
        notes=record.notes or None,
        discogs_url=release_page_url(record.release_id),
        enrichment=enrichment or Enrichment(),
    )


def enrichment_for(browser, record: Record) -> Enrichment:
    """Enrichment block for `record`, ignoring results for any other album."""
    tracker = browser.enrichment
    if tracker is None:
        return Enrichment()
    snapshot = tracker.snapshot()
    if snapshot.row_id != record.row_id:
        return Enrichment(loading=True)
    return Enrichment(
        loading=snapshot.pending,
        image_url=snapshot.result.image_url,
        reference_page_url=snapshot.result.reference_page_url,
    )


def build_view_model(browser) -> ViewModel:
    """Project the browser's current state into renderable view data."""
    state = browser.state
    store = browser.store

    groups = browser.artist_groups()
    artists = [
        ArtistItem(
            name=g.artist,
            count=g.count,
            active=g.artist == state.artist,
            visible=matches_search(g.artist, state.search),
        )
        for g in groups
    ]

    albums = [
        album_card(r, active=state.album is not None and r.row_id == state.album.row_id)
        for r in browser.selected_albums()
    ]

    detail = None
    if state.album is not None:
        detail = album_detail(state.album, enrichment_for(browser, state.album))

    return ViewModel(
        phase=state.phase.value,
        folder=state.folder,
        record_count=record_count_text(store, state.folder),
        search=state.search,
        folders=folder_options(store.folders, state.folder),
        artists=artists,
        albums=albums,
        detail=detail,
        artists_message=None if artists else NO_ARTISTS_MESSAGE,
        albums_message=None if albums else NO_ARTIST_SELECTED_MESSAGE,
        detail_message=None if detail else NO_ALBUM_SELECTED_MESSAGE,
    )
