import os
from dotenv import load_dotenv

# Load .env before reading env vars
load_dotenv()

# Comma-separated site names from mapping.SITE_PROFILES; empty = all of them
SCRAPE_SITES = [s.strip() for s in os.getenv("SCRAPE_SITES", "").split(",") if s.strip()]

CREDIT_CARD_ID = os.getenv("CREDIT_CARD_ID", "6658b688892bce96bd5d588f")

# Per-request deadline in seconds
FETCH_TIMEOUT = float(os.getenv("FETCH_TIMEOUT", "45"))

# Extra attempts for the listing page (detail pages are never retried)
FETCH_RETRIES = int(os.getenv("FETCH_RETRIES", "1"))
RETRY_DELAY = float(os.getenv("RETRY_DELAY", "1"))

# "log" or "notion"
PUBLISH_TARGET = os.getenv("PUBLISH_TARGET", "log").strip().lower()

NOTION_TOKEN = os.environ.get("NOTION_TOKEN")
NOTION_DATABASE_ID = os.environ.get("NOTION_DATABASE_ID")
