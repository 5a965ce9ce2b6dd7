"""
Checksum/Statistics Engine for per-agency document statistics.

Documents are grouped by agency name in first-occurrence order. Each group is
serialized to compact JSON and hashed with SHA-256, so an unchanged group
always yields the same checksum and a changed group almost never does.
"""

import hashlib
import json
import logging
from datetime import datetime
from typing import Dict, List, Optional

from .models import AgencyStatistics, Document, utc_now


logger = logging.getLogger(__name__)

UNKNOWN_GROUP = "Unknown"


def calculate_checksum(data: str) -> str:
    """
    Calculate the SHA-256 checksum of a string.

    Args:
        data: Text to hash (encoded as UTF-8)

    Returns:
        64-character lowercase hex digest
    """
    return hashlib.sha256(data.encode('utf-8')).hexdigest()


def serialize_documents(documents: List[Document]) -> str:
    """Serialize documents to the canonical JSON text used for checksums."""
    return json.dumps(
        [doc.to_dict() for doc in documents],
        ensure_ascii=False,
        separators=(',', ':')
    )


def group_by_agency(documents: List[Document]) -> Dict[str, List[Document]]:
    """Group documents by agency name, keeping first-occurrence order."""
    groups: Dict[str, List[Document]] = {}
    for doc in documents:
        groups.setdefault(doc.agency_name or UNKNOWN_GROUP, []).append(doc)
    return groups


def calculate_statistics(documents: List[Document],
                         timestamp: Optional[datetime] = None) -> List[AgencyStatistics]:
    """
    Compute per-agency statistics for a document set.

    Args:
        documents: Documents in the order they were fetched
        timestamp: Time to stamp on each record (default: now)

    Returns:
        Statistics sorted by document count, largest first; agencies with
        equal counts keep their first-occurrence order
    """
    timestamp = timestamp or utc_now()

    statistics = [
        AgencyStatistics(
            agency_name=agency_name,
            document_count=len(group),
            checksum=calculate_checksum(serialize_documents(group)),
            last_updated=timestamp
        )
        for agency_name, group in group_by_agency(documents).items()
    ]

    statistics.sort(key=lambda s: s.document_count, reverse=True)

    logger.debug(f"Calculated statistics for {len(statistics)} agencies "
                 f"from {len(documents)} documents")
    return statistics
