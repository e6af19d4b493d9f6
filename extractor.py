"""
Pure extraction functions for cashback listings.

Everything here works on already-fetched markup; the only network access
goes through the fetch callable handed to enrich_details().
"""

import logging
import re
import threading
from dataclasses import replace
from typing import Callable, Iterable, List, Optional, Tuple
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup
from bs4.element import Tag

from errors import DetailFetchError, ParseError
from mapping import SelectorProfile
from models import CashbackDetails, CashbackItem, RawItem
from text_utils import (
    clean_whitespace,
    contains_cashback_keywords,
    get_first_word,
    is_absolute_url,
    reorder_bidi_text,
    resolve_url,
    unwrap_css_url,
)

logger = logging.getLogger(__name__)

Fetch = Callable[[str], str]


class HtmlNode:
    """Thin wrapper giving a bs4 element the query/text/attr/css_property surface."""

    def __init__(self, tag: Tag):
        self._tag = tag

    def query(self, selector: str) -> List["HtmlNode"]:
        return [HtmlNode(t) for t in self._tag.select(selector)]

    def first(self, selector: str) -> Optional["HtmlNode"]:
        t = self._tag.select_one(selector)
        return HtmlNode(t) if t is not None else None

    def text(self) -> str:
        return clean_whitespace(self._tag.get_text(" ", strip=True))

    def attr(self, name: str) -> Optional[str]:
        value = self._tag.get(name)
        if isinstance(value, list):
            value = " ".join(value)
        return value

    def css_property(self, name: str) -> Optional[str]:
        style = self.attr("style")
        if not style:
            return None
        m = re.search(
            rf"(?:^|;)\s*{re.escape(name)}\s*:\s*((?:url\([^)]*\)|[^;])+)",
            style,
            re.IGNORECASE,
        )
        return m.group(1).strip() if m else None


class HtmlDocument(HtmlNode):
    pass


def parse_document(markup: str) -> HtmlDocument:
    if not isinstance(markup, str):
        raise ParseError(f"Expected markup text, got {type(markup).__name__}")
    try:
        soup = BeautifulSoup(markup, "html.parser")
    except Exception as e:
        raise ParseError(str(e)) from e
    return HtmlDocument(soup)


def text_of(node: HtmlNode, selector: str) -> str:
    if not selector:
        return ""
    el = node.first(selector)
    if el is None:
        return ""
    return el.text()


def origin_of(url: str) -> str:
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def read_image(node: HtmlNode, profile: SelectorProfile) -> Optional[str]:
    el = node.first(profile.image)
    if el is None:
        return None
    if profile.image_attr:
        return el.attr(profile.image_attr) or None
    return unwrap_css_url(el.css_property("background-image"))


def extract_raw_items(document: HtmlNode, profile: SelectorProfile,
                      base_url: Optional[str] = None) -> List[RawItem]:
    """Read every item node in document order, no filtering."""
    base_url = base_url or profile.url
    items: List[RawItem] = []

    for node in document.query(profile.item):
        detail_url = None
        if profile.detail_link:
            link_el = node.first(profile.detail_link)
            href = link_el.attr("href") if link_el else None
            if href:
                detail_url = urljoin(base_url, href)

        items.append(
            RawItem(
                title=text_of(node, profile.title),
                sub_title=text_of(node, profile.sub_title),
                image=read_image(node, profile),
                detail_url=detail_url,
            )
        )

    return items


def filter_key(raw: RawItem, profile: SelectorProfile) -> str:
    if profile.filter_on_first_word:
        return get_first_word(raw.sub_title)
    return raw.sub_title


def build_cashback_items(raws: Iterable[RawItem], profile: SelectorProfile,
                         keywords: Iterable[str], base_url: Optional[str] = None) -> List[CashbackItem]:
    keywords = frozenset(keywords)
    origin = origin_of(base_url or profile.url)
    items: List[CashbackItem] = []

    for raw in raws:
        if not (contains_cashback_keywords(raw.title, keywords)
                or contains_cashback_keywords(filter_key(raw, profile), keywords)):
            continue

        image = raw.image
        if image and not is_absolute_url(image):
            image = resolve_url(origin, image)

        items.append(
            CashbackItem(
                title=reorder_bidi_text(raw.title, profile.reverse_segments),
                sub_title=reorder_bidi_text(raw.sub_title, profile.reverse_segments),
                background_image=image,
                detail_url=raw.detail_url,
            )
        )

    return items


def extract(document: HtmlNode, profile: SelectorProfile,
            keywords: Optional[Iterable[str]] = None,
            base_url: Optional[str] = None) -> List[CashbackItem]:
    """
    Extract cashback items from a parsed listing page.

    Args:
        document: Parsed listing page
        profile: Selector profile of the site the page came from
        keywords: Cashback keywords (defaults to the profile's set)
        base_url: URL the page was fetched from (defaults to profile.url)

    Returns:
        Matching items in document order, titles already reordered for display
    """
    if keywords is None:
        keywords = profile.keywords
    raws = extract_raw_items(document, profile, base_url=base_url)
    items = build_cashback_items(raws, profile, keywords, base_url=base_url)
    logger.info(f"  Selector '{profile.item}' matched {len(raws)} items, {len(items)} cashback")

    if not items:
        logger.warning("No cashback items found.")

    return items


def extract_details(document: HtmlNode, profile: SelectorProfile) -> CashbackDetails:
    rev = profile.reverse_segments
    return CashbackDetails(
        title=reorder_bidi_text(text_of(document, profile.detail_title), rev),
        description=reorder_bidi_text(text_of(document, profile.detail_description), rev),
        dedicated_coupon=reorder_bidi_text(text_of(document, profile.detail_coupon), rev),
    )


def enrich_details(items: List[CashbackItem], fetch: Fetch, profile: SelectorProfile,
                   stop_event: Optional[threading.Event] = None
                   ) -> Tuple[List[CashbackItem], List[DetailFetchError]]:
    """
    Fetch each item's detail page, one at a time, and attach its fields.

    A failing detail page only costs that item its details. Once stop_event is
    set, or Ctrl-C interrupts a fetch, the remaining items are passed through
    untouched.
    """
    if stop_event is None:
        stop_event = threading.Event()
    enriched: List[CashbackItem] = []
    errors: List[DetailFetchError] = []

    for item in items:
        if not item.detail_url or stop_event.is_set():
            enriched.append(item)
            continue

        try:
            details = extract_details(parse_document(fetch(item.detail_url)), profile)
        except KeyboardInterrupt:
            logger.warning(f"Interrupted, skipping details from {item.detail_url} on")
            stop_event.set()
            enriched.append(item)
            continue
        except Exception as e:
            err = DetailFetchError(item.title, item.detail_url, e)
            logger.warning(str(err))
            errors.append(err)
            enriched.append(item)
            continue

        enriched.append(replace(item, cashback_details=details))

    return enriched, errors
