#!/usr/bin/env python3
"""Flask web UI for browsing a vinyl collection.

Features:
- Folder filter, artist list with search, album list and album details
- Cover art and reference links resolved in the background per album
- JSON view model at `/api/view` and enrichment polling at `/enrichment_status`

The UI is a thin renderer: every route dispatches one command to the
`CatalogBrowser` held by the app and renders `build_view_model(browser)`.
The collection is loaded on the first request so importing this module never
touches the filesystem or network.
"""
from pathlib import Path
import logging
import sys
import threading
from typing import Optional

from flask import Blueprint, Flask, current_app, flash, jsonify, redirect, render_template, request, url_for

# Ensure project root is importable so we can import `catalog` modules
HERE = Path(__file__).resolve().parent.parent
if str(HERE) not in sys.path:
    sys.path.insert(0, str(HERE))

from catalog.collection import ALL_FOLDERS, CollectionStore
from catalog.config_manager import Config
from catalog.csv_parser import read_collection
from catalog.enrichment import EnrichmentResolver, EnrichmentTracker
from catalog.exceptions import LoadError
from catalog.selection import CatalogBrowser
from catalog.view_model import build_view_model

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'catalog_browser'

bp = Blueprint('browser', __name__)


def load_browser(config: Config, resolver=None) -> CatalogBrowser:
    """
    Build a browser for the configured collection.

    Raises:
        LoadError: If the collection source cannot be read
    """
    records, headers = read_collection(config.collection_source, timeout=config.request_timeout)
    resolver = resolver or EnrichmentResolver.from_config(config)
    return CatalogBrowser(CollectionStore(records, headers), EnrichmentTracker(resolver))


def get_browser() -> CatalogBrowser:
    return current_app.extensions[EXTENSION_KEY]['browser']


def _current_view():
    browser = get_browser()
    with browser.lock:
        return build_view_model(browser)


def _ensure_loaded(app: Flask) -> None:
    """Load the collection once per process; a failure leaves an empty browser."""
    ext = app.extensions[EXTENSION_KEY]
    with ext['lock']:
        if ext['browser'] is not None:
            return
        try:
            ext['browser'] = load_browser(ext['config'])
        except LoadError as e:
            logger.error(f"Failed to load collection: {e}")
            ext['load_error'] = str(e)
            ext['browser'] = CatalogBrowser()


@bp.before_app_request
def _load_collection_on_first_request():
    _ensure_loaded(current_app)


@bp.route('/')
def index():
    view = _current_view()
    load_error = current_app.extensions[EXTENSION_KEY]['load_error']
    return render_template('index.html', view=view, load_error=load_error)


@bp.route('/folder', methods=['GET', 'POST'])
def folder():
    name = request.values.get('folder') or ALL_FOLDERS
    get_browser().on_folder_change(name)
    return redirect(url_for('browser.index'))


@bp.route('/artist')
def artist():
    name = request.args.get('name')
    if name is None or not get_browser().on_artist_select(name):
        flash('Artist is not part of the current folder', 'error')
    return redirect(url_for('browser.index'))


@bp.route('/album')
def album():
    album_id = request.args.get('id')
    if not get_browser().on_album_select(album_id):
        flash('Album is not part of the selected artist', 'error')
    return redirect(url_for('browser.index'))


@bp.route('/search')
def search():
    get_browser().on_search(request.args.get('q', ''))
    return redirect(url_for('browser.index'))


@bp.route('/api/view')
def api_view():
    return jsonify(_current_view().to_dict())


@bp.route('/enrichment_status')
def enrichment_status():
    browser = get_browser()
    with browser.lock:
        selected = browser.state.album
        snapshot = browser.enrichment.snapshot() if browser.enrichment is not None else None
    if selected is None or snapshot is None:
        return {'status': 'unknown'}, 404

    if snapshot.row_id != selected.row_id:
        return {'status': 'unknown'}, 404

    return {
        'status': 'running' if snapshot.pending else 'completed',
        'album_id': selected.row_id,
        'image_url': snapshot.result.image_url,
        'reference_page_url': snapshot.result.reference_page_url,
    }


def create_app(config: Optional[Config] = None, browser: Optional[CatalogBrowser] = None) -> Flask:
    """
    Create the web UI application.

    Args:
        config: Loaded configuration (default: `Config()`)
        browser: Pre-built browser; skips loading the configured collection
    """
    config = config or Config()
    app = Flask(__name__)
    app.secret_key = config.webui_secret
    app.extensions[EXTENSION_KEY] = {
        'config': config,
        'browser': browser,
        'load_error': None,
        'lock': threading.Lock(),
    }
    app.register_blueprint(bp)
    return app


app = create_app()


if __name__ == '__main__':
    config = app.extensions[EXTENSION_KEY]['config']
    config._validate()
    config.setup_logging()
    logger.info(f"Configuration loaded: {config}")
    app.run(debug=True, port=5000, use_reloader=True)
