"""Enrichment Merge — pure functions that index and merge supplementary question fields.

Invariants:
    - Persisted non-null fields are never overwritten by supplementary fields;
      NULL columns are filled when the entry supplies a value
    - The URL key of an enrichment entry is never copied into a record
    - Every record whose descriptionUrl has no entry is reported in missing_urls
    - No IO: callers fetch the payload, these functions only reshape it

Design Decisions:
    - Missing matches returned explicitly (MergeResult.missing_urls) instead of
      silently skipped: the list route logs them and reports a partial status
    - Payload elements may be JSON objects or JSON-encoded object strings: the
      scripted service has answered with both shapes
"""

import json
import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

# Keys an enrichment entry may use for its description URL
URL_KEYS = ("descriptionURL", "descriptionUrl")

RECORD_URL_KEY = "descriptionUrl"


@dataclass
class MergeResult:
    """Records after merge plus the URLs that had no enrichment entry."""
    records: list[dict]
    missing_urls: list[str] = field(default_factory=list)


def collect_description_urls(records: list[dict]) -> list[str]:
    """Distinct non-empty description URLs, in first-seen order."""
    seen: dict[str, None] = {}
    for record in records:
        url = record.get(RECORD_URL_KEY)
        if url:
            seen.setdefault(url, None)
    return list(seen)


def index_enrichment_payload(payload: object) -> dict[str, dict]:
    """Index an enrichment response array by description URL.

    Raises:
        ValueError: payload is not a JSON array
    """
    if not isinstance(payload, list):
        raise ValueError(
            f"Enrichment payload must be a JSON array, got {type(payload).__name__}",
        )
    indexed: dict[str, dict] = {}
    for position, item in enumerate(payload):
        entry = _decode_entry(item)
        if entry is None:
            logger.warning(f"Skipping undecodable enrichment entry at {position}")
            continue
        url = _entry_url(entry)
        if not url:
            logger.warning(f"Skipping enrichment entry without URL at {position}")
            continue
        indexed[url] = entry
    return indexed


def merge_enrichment(
    records: list[dict], enrichment: dict[str, dict],
) -> MergeResult:
    """Merge supplementary fields into records matched by descriptionUrl."""
    merged_records = []
    missing: dict[str, None] = {}
    for record in records:
        url = record.get(RECORD_URL_KEY)
        extra = enrichment.get(url) if url else None
        if extra is None:
            if url:
                missing.setdefault(url, None)
            merged_records.append(dict(record))
            continue
        merged_records.append(_merge_one(record, extra))
    return MergeResult(records=merged_records, missing_urls=list(missing))


def _merge_one(record: dict, extra: dict) -> dict:
    merged = dict(record)
    for key, value in extra.items():
        if key in URL_KEYS or merged.get(key) is not None:
            continue
        merged[key] = value
    return merged


def _decode_entry(item: object) -> dict | None:
    if isinstance(item, dict):
        return item
    if isinstance(item, str):
        try:
            decoded = json.loads(item)
        except ValueError:
            return None
        return decoded if isinstance(decoded, dict) else None
    return None


def _entry_url(entry: dict) -> str | None:
    for key in URL_KEYS:
        value = entry.get(key)
        if isinstance(value, str) and value:
            return value
    return None
