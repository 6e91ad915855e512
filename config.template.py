# Vinyl Collection Browser Configuration Template
# Copy this file to config.py and update with your settings

# ========== COLLECTION SOURCE ==========
# Path or http(s) URL of the collection CSV export
COLLECTION_SOURCE = "collection.csv"

# ========== DISCOGS SETTINGS ==========
DISCOGS_API_URL = "https://api.discogs.com"
DISCOGS_TOKEN = None            # Optional personal access token (Settings -> Developers)

# ========== WIKIPEDIA SETTINGS ==========
WIKIPEDIA_API_URL = "https://en.wikipedia.org/w/api.php"
WIKIPEDIA_THUMB_SIZE = 500      # Width in pixels of fallback cover thumbnails

# ========== HTTP SETTINGS ==========
# Both services ask clients to identify themselves
USER_AGENT = "VinylCollectionApp/1.0"
REQUEST_TIMEOUT = None          # Seconds; None keeps the requests default

# ========== LOGGING SETTINGS ==========
LOG_LEVEL = "INFO"              # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"

# ========== WEB UI ==========
WEBUI_SECRET = "dev-secret"     # Flask session secret (flash messages)
