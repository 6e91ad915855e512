"""
Pytest fixtures for vinyl collection browser tests

Provides common test data and fake lookup clients for use across all test modules.
"""
import pytest

from catalog.collection import CollectionStore
from catalog.csv_parser import parse_collection
from catalog.models import EnrichmentResult


SAMPLE_CSV = """Catalog#,Artist,Title,Label,Format,Rating,Released,release_id,CollectionFolder,Date Added,Collection Media Condition,Collection Sleeve Condition,Collection Notes
PCS 7088,The Beatles,Abbey Road,Apple Records,LP,,1969,2520542,Shelf A,2025-11-21 19:36:00,Very Good Plus (VG+),Very Good (VG),"Gatefold, ""UK"" press"
SHVL 804,Pink Floyd,The Dark Side Of The Moon,Harvest,LP,,1973,1873013,Shelf A,2024-02-03 10:00:00,Near Mint (NM or M-),Near Mint (NM or M-),
BS 2607,Fleetwood Mac,Rumours,Warner Bros. Records,LP,,1977,,Shelf B,2023-07-15 12:30:00,Good Plus (G+),Generic,
PCS 7027,The Beatles,Revolver,Parlophone,LP,,1966,,Shelf B,2023-01-01 08:00:00,Mint (M),Fair (F),

SIG 001,Björk,Debut,One Little Indian,LP,,1993,,Crate,2022-05-05 09:00:00,,,
CL 1355,Miles Davis,Kind Of Blue,Columbia,LP,,,,,,,,
"""


@pytest.fixture
def sample_csv_text():
    """Collection export in the Discogs CSV layout, with one blank line."""
    return SAMPLE_CSV


@pytest.fixture
def sample_records(sample_csv_text):
    records, _ = parse_collection(sample_csv_text)
    return records


@pytest.fixture
def sample_store(sample_csv_text):
    records, headers = parse_collection(sample_csv_text)
    return CollectionStore(records, headers)


@pytest.fixture
def mock_discogs_release_response():
    """Mock Discogs release API response."""
    return {
        "id": 2520542,
        "title": "Abbey Road",
        "images": [
            {"type": "secondary", "uri": "https://i.discogs.com/back.jpg"},
            {"type": "primary", "uri": "https://i.discogs.com/front.jpg"},
        ],
    }


@pytest.fixture
def mock_wikipedia_search_response():
    """Mock Wikipedia list=search API response."""
    return {
        "batchcomplete": "",
        "query": {
            "searchinfo": {"totalhits": 2},
            "search": [
                {"ns": 0, "title": "Abbey Road", "pageid": 1},
                {"ns": 0, "title": "Abbey Road Studios", "pageid": 2},
            ],
        },
    }


@pytest.fixture
def mock_wikipedia_pageimages_response():
    """Mock Wikipedia prop=pageimages API response."""
    return {
        "batchcomplete": "",
        "query": {
            "pages": {
                "1": {
                    "pageid": 1,
                    "title": "Abbey Road",
                    "thumbnail": {"source": "https://upload.wikimedia.org/abbey.jpg", "width": 500, "height": 500},
                }
            }
        },
    }


class ManualSpawner:
    """Collects background jobs so tests decide when (and in which order) they run."""

    def __init__(self):
        self.jobs = []

    def __call__(self, job):
        self.jobs.append(job)

    def run(self, index):
        self.jobs[index]()

    def run_all(self):
        for job in list(self.jobs):
            job()


class StaticResolver:
    """Resolver returning a canned result per album title."""

    def __init__(self, results=None):
        self.results = results or {}
        self.calls = []

    def resolve(self, record):
        self.calls.append(record.title)
        return self.results.get(record.title, EnrichmentResult())


@pytest.fixture
def spawner():
    return ManualSpawner()


@pytest.fixture
def static_resolver():
    return StaticResolver({
        "Abbey Road": EnrichmentResult("https://img/abbey.jpg", "https://en.wikipedia.org/wiki/Abbey_Road"),
        "Revolver": EnrichmentResult("https://img/revolver.jpg", "https://en.wikipedia.org/wiki/Revolver_(Beatles_album)"),
    })


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    """Print a concise, one-line summary at the end of the test run."""
    stats = getattr(terminalreporter, "stats", {})

    def _count(key):
        return len(stats.get(key, []))

    terminalreporter.write_sep("=", "pytest summary")
    terminalreporter.write_line(
        f"Passed: {_count('passed')}  Failed: {_count('failed')}  "
        f"Skipped: {_count('skipped')}  Errors: {_count('error')}"
    )
