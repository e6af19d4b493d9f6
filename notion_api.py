from datetime import datetime, timezone
from typing import List, Optional

from notion_client import Client

import config
from models import BenefitRecord


# ---------- Helpers ----------

def _rich_text(text: Optional[str]):
    if not text:
        return []
    # Notion API limit for a single text object is large, but keep it safe
    return [{"type": "text", "text": {"content": text[:1999]}}]

def _select(name: Optional[str]):
    """Sanitize Notion select: commas are not allowed; also trim very long labels."""
    if not name:
        return None
    cleaned = str(name).replace(",", " ").strip()
    if len(cleaned) > 80:
        cleaned = cleaned[:80]
    return {"name": cleaned}

def _today_iso():
    return datetime.now(timezone.utc).date().isoformat()


def benefit_properties(record: BenefitRecord) -> dict:
    today_iso = _today_iso()
    return {
        "Name": {"title": _rich_text(record.business_name)},
        "Subtitle": {"rich_text": _rich_text(record.business_sub_title)},
        "Credit Card": {"select": _select(record.credit_card_id)},
        "Discount Type": {"select": _select(record.discount_type)},
        "Value Type": {"select": _select(record.value_type)},
        "Value": {"number": record.value},
        "Min Purchase": {"number": record.min_purchase_amount},
        "Last Seen": {"date": {"start": today_iso}},
    }


# ---------- Sink ----------

class NotionSink:
    """Publish sink that upserts benefit records into a Notion database."""

    def __init__(self, client=None, database_id: Optional[str] = None):
        database_id = database_id or config.NOTION_DATABASE_ID
        if client is None:
            if not config.NOTION_TOKEN or not database_id:
                raise RuntimeError("Missing NOTION_TOKEN or NOTION_DATABASE_ID environment variables")
            client = Client(auth=config.NOTION_TOKEN)
        if not database_id:
            raise RuntimeError("Missing NOTION_DATABASE_ID environment variable")
        self.client = client
        self.database_id = database_id

    def __call__(self, records: List[BenefitRecord]) -> None:
        for record in records:
            self.upsert_benefit(record)

    def find_existing_page(self, name: str, credit_card_id: Optional[str]):
        """
        Query Notion for an existing page:
        - Name (Title) equals
        - Credit Card (Select) equals credit_card_id (if present)
        """
        filters = {"and": [{"property": "Name", "title": {"equals": name}}]}
        if credit_card_id:
            filters["and"].append({"property": "Credit Card", "select": {"equals": credit_card_id}})

        res = self.client.databases.query(database_id=self.database_id, filter=filters)
        results = res.get("results", [])
        return results[0]["id"] if results else None

    def upsert_benefit(self, record: BenefitRecord):
        if not record.business_name:
            return

        props = benefit_properties(record)
        page_id = self.find_existing_page(record.business_name, record.credit_card_id)

        if page_id:
            self.client.pages.update(page_id=page_id, properties=props)
        else:
            self.client.pages.create(parent={"database_id": self.database_id}, properties=props)
