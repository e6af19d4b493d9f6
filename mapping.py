# Configure the sites you want to scrape and how to read them.

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional

# Words that mark a listing as a cashback offer (Hebrew has no case, match literally)
CASHBACK_KEYWORDS: FrozenSet[str] = frozenset({
    "קאשבק",
    "קאשבאק",
    "כסף בחזרה",
    "החזר כספי",
})

# Hever listings also spell it out in English and with the short form
HEVER_KEYWORDS: FrozenSet[str] = CASHBACK_KEYWORDS | frozenset({
    "החזר",
    "Cashback",
    "cashback",
})

# Fields read from an offer's detail page
DETAIL_SELECTORS = {
    "title": ".cashBack-title",
    "description": ".cashBack-description",
    "coupon": ".dedicate-coupon-block-store-coupon",
}


@dataclass(frozen=True)
class SelectorProfile:
    """CSS selectors and field-mapping quirks for one source site."""
    name: str
    url: str
    item: str
    title: str
    sub_title: str
    image: str
    # attribute holding the image reference; None reads the background-image CSS property
    image_attr: Optional[str] = None
    detail_link: Optional[str] = None
    detail_title: str = DETAIL_SELECTORS["title"]
    detail_description: str = DETAIL_SELECTORS["description"]
    detail_coupon: str = DETAIL_SELECTORS["coupon"]
    # some sites prefix the keyword to unrelated marketing copy
    filter_on_first_word: bool = False
    reverse_segments: bool = False
    keywords: FrozenSet[str] = CASHBACK_KEYWORDS
    requires_js: bool = False


SITE_PROFILES: Dict[str, SelectorProfile] = {
    # Isracard benefits - background image set inline on the card
    "isracard": SelectorProfile(
        name="isracard",
        url="https://benefits.isracard.co.il/parentcategories/online-benefits/",
        item=".category-item",
        title=".caption-title",
        sub_title=".caption-sub-title",
        image=".category-featured-benefit",
        filter_on_first_word=True,
    ),

    # Hever cashback shops - lazy-loaded logos with relative data-src
    "hever": SelectorProfile(
        name="hever",
        url="https://www.cashback-hvr.co.il/all-shops?mid=4198574&sig=54948354b4a0cc12c9879cfc4c1c8dbf",
        item=".retailer_preview",
        title=".tete.ellipsis",
        sub_title=".slider h4",
        image=".preview_logo",
        image_attr="data-src",
        detail_link="a[href]",
        reverse_segments=True,
        keywords=HEVER_KEYWORDS,
    ),

    # Add more sites below as needed...
}


def get_profile(site: str) -> SelectorProfile:
    try:
        return SITE_PROFILES[site.strip().lower()]
    except KeyError:
        known = ", ".join(sorted(SITE_PROFILES))
        raise KeyError(f"Unknown site '{site}' (known: {known})") from None
