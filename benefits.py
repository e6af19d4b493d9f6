"""
Map extracted cashback items onto the benefits-catalog schema and hand them to a sink.
"""

import json
import logging
from typing import Callable, Iterable, List

from models import BenefitRecord, CashbackItem
from text_utils import extract_number

logger = logging.getLogger(__name__)

Sink = Callable[[List[BenefitRecord]], None]


def to_benefit_record(item: CashbackItem, credit_card_id: str) -> BenefitRecord:
    sub_title = item.sub_title or ""
    return BenefitRecord(
        business_name=item.title,
        business_sub_title=sub_title,
        credit_card_id=credit_card_id,
        value_type="percentage" if "%" in sub_title else "number",
        value=extract_number(sub_title),
    )


def publish(items: Iterable[CashbackItem], sink: Sink, credit_card_id: str) -> List[BenefitRecord]:
    """Map every item first, then pass the whole batch to the sink in one call."""
    records = [to_benefit_record(it, credit_card_id) for it in items]
    sink(records)
    return records


def log_sink(records: List[BenefitRecord]) -> None:
    payload = json.dumps([r.to_dict() for r in records], ensure_ascii=False, indent=2)
    logger.info(f"Piped {len(records)} benefits to catalog:\n{payload}")
