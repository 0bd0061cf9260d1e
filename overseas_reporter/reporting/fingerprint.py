"""
Batch Fingerprint

A deterministic digest of a batch, used to skip uploads when nothing
changed since the last pass. Item order is part of the digest; batches
come out in document order, which is stable for an unchanged page.
"""

import hashlib
import json

from ..models import ExtractionBatch


def batch_fingerprint(batch: ExtractionBatch) -> str:
    """
    Compute the fingerprint of a batch.

    Returns:
        Hex SHA-256 over the location and the ordered
        (shop, name, stock, cost) tuples
    """
    canonical = json.dumps(
        [
            batch.location or "",
            [[item.shop, item.name, item.stock, item.unit_cost] for item in batch.items],
        ],
        ensure_ascii=False,
        separators=(",", ":"),
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
