"""
Records passed between the extractor, the normalizer and the publish sink.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass
class RawItem:
    """One matched listing node before filtering and bidi reordering."""
    title: str
    sub_title: str
    image: Optional[str] = None
    detail_url: Optional[str] = None


@dataclass
class CashbackDetails:
    title: str
    description: str
    dedicated_coupon: str


@dataclass
class CashbackItem:
    title: str
    sub_title: str
    background_image: Optional[str] = None
    detail_url: Optional[str] = None
    cashback_details: Optional[CashbackDetails] = None


@dataclass
class BenefitRecord:
    """Downstream benefits-catalog schema."""
    business_name: str
    business_sub_title: str
    credit_card_id: str
    value_type: str  # 'percentage' or 'number'
    value: Optional[float]
    discount_type: str = "cashback"
    min_purchase_amount: Union[int, float] = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "businessName": self.business_name,
            "businessSubTitle": self.business_sub_title,
            "creditCardId": self.credit_card_id,
            "discountType": self.discount_type,
            "valueType": self.value_type,
            "value": self.value,
            "minPurchaseAmount": self.min_purchase_amount,
        }


@dataclass
class ScrapeResult:
    """Outcome of one adapter run against one listing URL."""
    site: str
    url: str
    items: List[CashbackItem] = field(default_factory=list)
    published: bool = False
    detail_failures: int = 0
    errors: List[Exception] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.items)

    @property
    def failure_count(self) -> int:
        return len(self.errors)

    @property
    def ok(self) -> bool:
        return self.published
