from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional


# Record field -> accepted column names, first match wins
COLUMN_ALIASES: Dict[str, tuple] = {
    'artist': ('Artist',),
    'title': ('Title',),
    'label': ('Label',),
    'released': ('Released',),
    'format': ('Format',),
    'catalog_number': ('Catalog#', 'CatalogNumber'),
    'collection_folder': ('CollectionFolder',),
    'media_condition': ('Collection Media Condition', 'MediaCondition'),
    'sleeve_condition': ('Collection Sleeve Condition', 'SleeveCondition'),
    'date_added': ('Date Added', 'DateAdded'),
    'notes': ('Collection Notes', 'Notes'),
    'release_id': ('release_id', 'ReleaseId'),
}


@dataclass(frozen=True)
class Record:
    row_id: int
    artist: str = ""
    title: str = ""
    label: str = ""
    released: str = ""
    format: str = ""
    catalog_number: str = ""
    collection_folder: str = ""
    media_condition: str = ""
    sleeve_condition: str = ""
    date_added: str = ""
    notes: str = ""
    release_id: str = ""
    columns: Mapping[str, str] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_row(cls, row_id: int, row: Mapping[str, str]) -> "Record":
        """Build a Record from a parsed row; absent columns become empty strings."""
        values = {}
        for name, aliases in COLUMN_ALIASES.items():
            values[name] = next((row[a] for a in aliases if a in row), "")
        return cls(row_id=row_id, columns=MappingProxyType(dict(row)), **values)


@dataclass
class ArtistGroup:
    artist: str
    albums: List[Record] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.albums)


@dataclass(frozen=True)
class EnrichmentResult:
    image_url: Optional[str] = None
    reference_page_url: Optional[str] = None


EMPTY_RESULT = EnrichmentResult()
