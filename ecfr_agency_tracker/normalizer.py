"""
Document Normalizer for converting raw eCFR search result items into documents.

Search results come in several shapes: identifiers and titles live under
different field names, and descriptive names are sometimes nested in
``headings`` or ``hierarchy_headings`` objects. Each document field is
resolved through an ordered list of candidates; the first present, non-empty
value wins.
"""

import logging
from datetime import date, datetime
from typing import Any, Callable, Iterable, Optional

from .models import Document, UNKNOWN_AGENCY, UNKNOWN_TYPE
from .raw_item import RawItem, is_pure_integer
from .title_map import map_title_number


logger = logging.getLogger(__name__)

Resolver = Callable[[RawItem], Optional[str]]

DATE_FIELDS = ('starts_on', 'publication_date', 'date')
FALLBACK_DATE_FORMATS = ('%m/%d/%Y', '%Y/%m/%d', '%B %d, %Y', '%d %B %Y')


def first_of(item: RawItem, resolvers: Iterable[Resolver]) -> Optional[str]:
    """Apply resolvers in order and return the first non-empty result."""
    for resolver in resolvers:
        value = resolver(item)
        if value:
            return value
    return None


def field(name: str) -> Resolver:
    """Resolver reading a top-level string field."""
    return lambda item: item.get_string(name)


def nested(parent: str, name: str) -> Resolver:
    """Resolver reading a string field of a nested object."""
    def resolve(item: RawItem) -> Optional[str]:
        obj = item.get_object(parent)
        return obj.get_string(name) if obj else None
    return resolve


def parse_publication_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a date string leniently.

    Returns:
        The parsed date, or None when the value cannot be parsed
    """
    if not value:
        return None

    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace('Z', '+00:00')).date()
    except ValueError:
        pass

    for fmt in FALLBACK_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    logger.debug(f"Unparseable publication date: {value!r}")
    return None


def _agency_list_token(item: RawItem) -> Optional[str]:
    raw = item.first_string('agency_names', 'agencies', 'agency')
    if not raw or is_pure_integer(raw):
        return None
    return raw.split(',')[0].strip() or None


def _hierarchy_title(item: RawItem) -> Optional[str]:
    hierarchy = item.get_object('hierarchy')
    if not hierarchy:
        return None
    return map_title_number(hierarchy.get_string('title'))


def _structured_agency(item: RawItem) -> Optional[str]:
    agency = item.get_object('agency')
    if agency:
        return agency.get_string('name')

    agency_str = item.get_string('agency')
    if agency_str and not is_pure_integer(agency_str):
        return agency_str
    return None


def _parent_agency(item: RawItem) -> Optional[str]:
    parent = item.get_string('parent_agency')
    if parent and not is_pure_integer(parent):
        return parent
    return None


DOCUMENT_NUMBER_RESOLVERS = [
    field('document_number'),
    field('documentNumber'),
    field('doc_number'),
    field('object_id'),
]

# Headings carry the section text; flat fields tend to hold identifiers.
TITLE_RESOLVERS = [
    nested('headings', 'section'),
    nested('headings', 'part'),
    field('title'),
    field('heading'),
    field('section_id'),
]

AGENCY_RESOLVERS = [
    nested('headings', 'chapter'),
    nested('headings', 'title'),
    _agency_list_token,
    _hierarchy_title,
    _structured_agency,
    _parent_agency,
]

TYPE_RESOLVERS = [
    field('type'),
    field('document_type'),
]

URL_RESOLVERS = [
    field('html_url'),
    field('url'),
]

CITATION_FALLBACK_RESOLVERS = [
    field('citation'),
    field('cfr_reference'),
]


class DocumentNormalizer:
    """Converts raw search result items into Document records."""

    def normalize(self, raw: Any) -> Document:
        """
        Normalize one raw search result item.

        Args:
            raw: Decoded JSON item; non-object values yield a default document

        Returns:
            Normalized Document
        """
        item = raw if isinstance(raw, RawItem) else RawItem(raw)

        return Document(
            document_number=first_of(item, DOCUMENT_NUMBER_RESOLVERS),
            title=first_of(item, TITLE_RESOLVERS),
            agency_name=self.resolve_agency_name(item),
            type=first_of(item, TYPE_RESOLVERS) or UNKNOWN_TYPE,
            publication_date=self.resolve_publication_date(item),
            citation=self.resolve_citation(item),
            url=first_of(item, URL_RESOLVERS)
        )

    def resolve_agency_name(self, item: RawItem) -> str:
        """
        Resolve the agency name of an item.

        Headings hold curated names and win over flat agency fields, which may
        contain numeric category codes. The CFR title number is the structural
        fallback before the structured agency object and the parent agency.
        """
        return first_of(item, AGENCY_RESOLVERS) or UNKNOWN_AGENCY

    def resolve_citation(self, item: RawItem) -> Optional[str]:
        """Build a citation from hierarchy headings, else use a citation field."""
        hierarchy_headings = item.get_object('hierarchy_headings')
        if hierarchy_headings:
            parts = [
                hierarchy_headings.get_string(name)
                for name in ('title', 'part', 'section')
            ]
            parts = [p for p in parts if p]
            if parts:
                return ' '.join(parts)

        return first_of(item, CITATION_FALLBACK_RESOLVERS)

    def resolve_publication_date(self, item: RawItem) -> Optional[date]:
        """Parse the first date field present on the item."""
        for name in DATE_FIELDS:
            if name in item:
                return parse_publication_date(item.get_string(name))
        return None
