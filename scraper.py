import logging
import signal
import sys
import threading
import time
from functools import partial
from typing import Callable, List, Optional

import requests

import config
from benefits import Sink, log_sink, publish
from errors import NetworkError, ParseError, PublishError
from extractor import Fetch, HtmlDocument, enrich_details, extract, parse_document
from mapping import SITE_PROFILES, SelectorProfile, get_profile
from models import ScrapeResult

logger = logging.getLogger(__name__)

HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    ),
    "Accept-Language": "he,he-IL;q=0.9,en;q=0.8",
}


def fetch(url: str, timeout: float = config.FETCH_TIMEOUT) -> str:
    """Fetch static HTML via requests."""
    try:
        r = requests.get(url, headers=HEADERS, timeout=timeout)
        r.raise_for_status()
    except requests.RequestException as e:
        raise NetworkError(url, str(e)) from e
    return r.text


# Playwright path for JS-rendered pages (enabled automatically per site profile)
from playwright.sync_api import Error as PlaywrightError  # noqa: E402
from playwright.sync_api import sync_playwright  # noqa: E402


def fetch_with_js(url: str, timeout: float = config.FETCH_TIMEOUT) -> str:
    """Render page with a headless browser and return full HTML."""
    try:
        with sync_playwright() as p:
            browser = p.chromium.launch(headless=True)
            try:
                page = browser.new_page(extra_http_headers={"Accept-Language": HEADERS["Accept-Language"]})
                page.goto(url, wait_until="networkidle", timeout=timeout * 1000)
                return page.content()
            finally:
                browser.close()
    except PlaywrightError as e:
        raise NetworkError(url, str(e)) from e


def fetcher_for(profile: SelectorProfile, timeout: float = config.FETCH_TIMEOUT) -> Fetch:
    return partial(fetch_with_js if profile.requires_js else fetch, timeout=timeout)


def fetch_listing(url: str, fetch: Fetch, retries: int = config.FETCH_RETRIES,
                  retry_delay: float = config.RETRY_DELAY) -> HtmlDocument:
    """Fetch and parse a listing page, re-trying up to `retries` extra times."""
    attempt = 0
    while True:
        try:
            return parse_document(fetch(url))
        except (NetworkError, ParseError) as e:
            if attempt >= retries:
                raise
            attempt += 1
            logger.warning(f"Retrying {url} (retry {attempt} of {retries}) after: {e}")
            if retry_delay:
                time.sleep(retry_delay)


def scrape_site(profile: SelectorProfile,
                fetch: Optional[Fetch] = None,
                sink: Sink = log_sink,
                credit_card_id: str = config.CREDIT_CARD_ID,
                retries: int = config.FETCH_RETRIES,
                retry_delay: float = config.RETRY_DELAY,
                url: Optional[str] = None,
                stop_event: Optional[threading.Event] = None) -> ScrapeResult:
    """
    One adapter run: fetch listing, extract, enrich details, publish.

    Never raises for site-level failures; they are logged and returned in
    the result instead.
    """
    url = url or profile.url
    fetch = fetch or fetcher_for(profile)
    result = ScrapeResult(site=profile.name, url=url)

    logger.info(f"Processing {profile.name}: {url}")
    try:
        document = fetch_listing(url, fetch, retries=retries, retry_delay=retry_delay)
    except (NetworkError, ParseError) as e:
        logger.error(f"Error scraping the website {url}: {e}")
        result.errors.append(e)
        return result

    items = extract(document, profile, profile.keywords, base_url=url)
    items, detail_errors = enrich_details(items, fetch, profile, stop_event=stop_event)
    result.items = items
    result.detail_failures = len(detail_errors)
    result.errors.extend(detail_errors)

    try:
        publish(items, sink, credit_card_id)
    except Exception as e:
        err = PublishError(f"Publishing {len(items)} benefits from {profile.name} failed: {e}")
        logger.error(str(err))
        result.errors.append(err)
        return result

    result.published = True
    logger.info(f"Done. Published {len(items)} benefits from {profile.name}.")
    return result


def make_sink(target: str = config.PUBLISH_TARGET) -> Sink:
    if target == "notion":
        from notion_api import NotionSink
        return NotionSink()
    if target == "log":
        return log_sink
    raise ValueError(f"Unknown publish target '{target}'")


def run(sites: Optional[List[str]] = None,
        sink: Optional[Sink] = None,
        fetch: Optional[Callable[[str], str]] = None,
        stop_event: Optional[threading.Event] = None) -> List[ScrapeResult]:
    names = sites or config.SCRAPE_SITES or list(SITE_PROFILES)
    sink = sink or make_sink()
    results: List[ScrapeResult] = []

    for name in names:
        if stop_event is not None and stop_event.is_set():
            logger.info("Stop requested, skipping remaining sites")
            break
        try:
            profile = get_profile(name)
        except KeyError as e:
            logger.error(e.args[0])
            continue
        results.append(scrape_site(profile, fetch=fetch, sink=sink, stop_event=stop_event))

    ok = sum(1 for r in results if r.ok)
    logger.info(f"Finished {len(results)} sites: {ok} published, {len(results) - ok} failed.")
    return results


def install_stop_handlers(stop_event: threading.Event) -> None:
    """SIGTERM and Ctrl-C stop further detail fetches; what was scraped still gets published."""
    def _stop(signum, frame):
        logger.warning(f"Received {signal.Signals(signum).name}, finishing up")
        stop_event.set()

    signal.signal(signal.SIGTERM, _stop)
    signal.signal(signal.SIGINT, _stop)


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    stop_event = threading.Event()
    install_stop_handlers(stop_event)

    results = run(argv or None, stop_event=stop_event)
    return 0 if all(r.ok for r in results) else 1


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
