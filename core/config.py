# core/config.py

import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_API_URL = "http://localhost:5000"
REQUEST_TIMEOUT = 10  # seconds


def api_base_url() -> str:
    """Base address of the trips API, read from NAYLOS_API_URL (.env or environment)."""
    url = os.getenv("NAYLOS_API_URL") or DEFAULT_API_URL
    return url.strip().rstrip("/")
