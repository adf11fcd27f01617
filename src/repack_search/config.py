"""
Configuration for Repack Search.

Loads settings from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

# Meilisearch (indexed store)
MEILI_HOST = os.getenv("MEILI_HOST", "http://localhost:7700")
MEILI_API_KEY = os.getenv("MEILI_API_KEY")
MEILI_INDEX_NAME = os.getenv("MEILI_INDEX_NAME", "pirated_games")

# Google Programmable Search (live search)
GOOGLE_SEARCH_API_KEY = os.getenv("GOOGLE_SEARCH_API_KEY")
GOOGLE_SEARCH_CX = os.getenv("GOOGLE_SEARCH_CX")
GOOGLE_SEARCH_URL = os.getenv(
    "GOOGLE_SEARCH_URL", "https://www.googleapis.com/customsearch/v1"
)

# Repack provider feeds (HydraLinks)
FITGIRL_FEED_URL = os.getenv(
    "FITGIRL_FEED_URL", "https://hydralinks.cloud/sources/fitgirl.json"
)
DODI_FEED_URL = os.getenv("DODI_FEED_URL", "https://hydralinks.cloud/sources/dodi.json")

# Search settings
INDEX_SEARCH_LIMIT = int(os.getenv("INDEX_SEARCH_LIMIT", "50"))
INDEX_BATCH_SIZE = int(os.getenv("INDEX_BATCH_SIZE", "1000"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
