#!/usr/bin/env python3
"""
audit_enrichment.py - Cover art and reference link coverage report

Resolves enrichment for every album in a folder of the collection export and
reports how many albums end up with a cover image and a Wikipedia link.
Wikipedia links whose page title scores poorly against the album title are
listed as suspicious, since the text search simply trusts its top hit.

Nothing is cached or written back; every run queries the services again.

Usage:
    python scripts/audit_enrichment.py collection.csv --folder "Shelf A"
    python scripts/audit_enrichment.py collection.csv --min-score 60 -v
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional
from urllib.parse import unquote

from rapidfuzz import fuzz
from tqdm import tqdm

# Ensure project root is importable so we can import `catalog` modules
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from catalog.collection import ALL_FOLDERS, CollectionStore
from catalog.config_manager import Config
from catalog.csv_parser import read_collection
from catalog.enrichment import EnrichmentResolver
from catalog.exceptions import CatalogError
from catalog.models import EnrichmentResult, Record


@dataclass
class AuditRow:
    record: Record
    result: EnrichmentResult
    link_score: Optional[float] = None


def page_title_from_url(url: str) -> str:
    """Recover a readable page title from a Wikipedia article URL."""
    slug = url.rsplit('/wiki/', 1)[-1]
    return unquote(slug).replace('_', ' ')


def link_score(record: Record, reference_page_url: Optional[str]) -> Optional[float]:
    """Similarity (0-100) between the album title and the linked page title."""
    if not reference_page_url:
        return None
    page_title = page_title_from_url(reference_page_url)
    return fuzz.partial_ratio(record.title.lower(), page_title.lower())


def audit(records: Iterable[Record], resolver, show_progress: bool = True) -> List[AuditRow]:
    records = list(records)
    rows: List[AuditRow] = []
    for record in tqdm(records, desc="Resolving albums", disable=not show_progress, leave=True):
        result = resolver.resolve(record)
        rows.append(AuditRow(record, result, link_score(record, result.reference_page_url)))
    return rows


def summarize(rows: List[AuditRow], min_score: float) -> str:
    total = len(rows)
    with_image = sum(1 for r in rows if r.result.image_url)
    with_link = sum(1 for r in rows if r.result.reference_page_url)
    suspicious = [r for r in rows if r.link_score is not None and r.link_score < min_score]

    lines = [
        f"Albums checked: {total}",
        f"  With cover image: {with_image}",
        f"  With Wikipedia link: {with_link}",
        f"  Suspicious links (score < {min_score:g}): {len(suspicious)}",
    ]
    for row in suspicious:
        lines.append(
            f"    {row.record.artist} - {row.record.title} -> "
            f"{page_title_from_url(row.result.reference_page_url)} ({row.link_score:.0f})"
        )
    return '\n'.join(lines)


def main() -> int:
    parser = argparse.ArgumentParser(description="Report cover art and link coverage for a collection export")
    parser.add_argument('input', nargs='?', help='Collection CSV path or URL (default: COLLECTION_SOURCE)')
    parser.add_argument('--folder', default=ALL_FOLDERS, help='Only audit this collection folder (default: all)')
    parser.add_argument('--min-score', type=float, default=50.0, help='Flag links scoring below this (default: 50)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    args = parser.parse_args()

    config = Config()
    config.setup_logging()
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    source = args.input or config.collection_source
    try:
        records, headers = read_collection(source, timeout=config.request_timeout)
    except CatalogError as e:
        logging.error(f"Failed to load collection: {e}")
        return 1

    store = CollectionStore(records, headers)
    selected = store.filtered(args.folder)
    logging.info(f"Auditing {len(selected)} of {store.total} records (folder: {args.folder})")

    rows = audit(selected, EnrichmentResolver.from_config(config))
    print(summarize(rows, args.min_score))
    return 0


if __name__ == '__main__':
    sys.exit(main())
