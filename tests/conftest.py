import sys
from pathlib import Path

import pytest

# Add project root to sys.path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from mapping import SITE_PROFILES  # noqa: E402


ISRACARD_LISTING = """
<html><body>
  <div class="category-item">
    <div class="category-featured-benefit" style="background-image: url('/media/shop1.png'); background-size: cover"></div>
    <div class="caption-title">סופר פארם</div>
    <div class="caption-sub-title">קאשבק - 10% על כל הקניה</div>
  </div>
  <div class="category-item">
    <div class="category-featured-benefit"></div>
    <div class="caption-title">נעלי ספורט</div>
    <div class="caption-sub-title">הנחה 20% ללא קאשבק</div>
  </div>
  <div class="category-item">
    <div class="category-featured-benefit" style="background-image:url(https://cdn.example.com/a.png)"></div>
    <div class="caption-title">קאשבק באמזון</div>
    <div class="caption-sub-title">עד 50 ש"ח</div>
  </div>
</body></html>
"""

HEVER_LISTING = """
<html><body>
  <div class="retailer_preview ">
    <a href="/shop/1"><img class="preview_logo" data-src="/images/logo1.png"></a>
    <div class="tete ellipsis">ASOS</div>
    <div class="slider"><h4>קאשבק 15%</h4></div>
  </div>
  <div class="retailer_preview ">
    <a href="/shop/2"><img class="preview_logo" data-src="images/logo2.png"></a>
    <div class="tete ellipsis">Nike</div>
    <div class="slider"><h4>מבצע רגיל</h4></div>
  </div>
</body></html>
"""

DETAIL_PAGE = """
<html><body>
  <h1 class="cashBack-title">קאשבק 15%</h1>
  <p class="cashBack-description">על כל רכישה באתר</p>
  <span class="dedicate-coupon-block-store-coupon">HVR15</span>
</body></html>
"""


class FakeFetch:
    """Serves canned pages by URL; anything unknown raises."""

    def __init__(self, pages, failures=None):
        self.pages = dict(pages)
        self.failures = dict(failures or {})
        self.calls = []

    def __call__(self, url):
        self.calls.append(url)
        if self.failures.get(url):
            self.failures[url] -= 1
            from errors import NetworkError
            raise NetworkError(url, "boom")
        if url not in self.pages:
            from errors import NetworkError
            raise NetworkError(url, "404 Not Found")
        return self.pages[url]


class RecordingSink:
    def __init__(self):
        self.batches = []

    def __call__(self, records):
        self.batches.append(list(records))


@pytest.fixture
def isracard():
    return SITE_PROFILES["isracard"]


@pytest.fixture
def hever():
    return SITE_PROFILES["hever"]


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def make_fetch():
    return FakeFetch


@pytest.fixture
def pages():
    return {
        "isracard": ISRACARD_LISTING,
        "hever": HEVER_LISTING,
        "detail": DETAIL_PAGE,
    }
