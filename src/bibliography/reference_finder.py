"""Lexical detection of reference markers and the reference-list placeholder."""
from __future__ import annotations

import html
import logging
import re
from typing import Dict, List, Optional

from .models import ReferenceListMarker, ReferenceMarker, ReferenceScan

logger = logging.getLogger(__name__)


class ReferenceFinder:
    """Scan text for ``<ref>`` markers and a ``<reflist/>`` placeholder.

    Detection is pattern based only. Anything that does not match exactly is
    left alone as literal text.
    """

    _ATTRIBUTES = r"(?P<attrs>(?:\s+[\w-]+\s*=\s*(?:\"[^\"]*\"|'[^']*'))*)"

    REFERENCE_PATTERN = re.compile(
        r"<ref" + _ATTRIBUTES + r"\s*>(?P<key>[^<>]*)</ref\s*>",
        re.IGNORECASE,
    )
    REFERENCE_LIST_PATTERN = re.compile(
        r"<reflist" + _ATTRIBUTES + r"\s*(?:/>|>\s*</reflist\s*>)",
        re.IGNORECASE,
    )
    ATTRIBUTE_PATTERN = re.compile(r"([\w-]+)\s*=\s*(?:\"([^\"]*)\"|'([^']*)')")

    def scan(self, text: str) -> ReferenceScan:
        references = self.find_references(text)
        lists = self._find_reference_lists(text)
        scan = ReferenceScan(
            references=references,
            reference_list=lists[0] if lists else None,
            extra_reference_lists=lists[1:],
        )
        logger.debug(
            "Found %d reference markers and %d reference list markers",
            len(references),
            len(lists),
        )
        return scan

    def find_references(self, text: str) -> List[ReferenceMarker]:
        markers: List[ReferenceMarker] = []
        for match in self.REFERENCE_PATTERN.finditer(text):
            key = html.unescape(match.group("key")).strip()
            if not key:
                continue
            markers.append(
                ReferenceMarker(
                    raw_text=match.group(0),
                    identity_key=key,
                    position=match.start(),
                    attributes=self._parse_attributes(match.group("attrs")),
                )
            )
        return markers

    def find_reference_list(self, text: str) -> Optional[ReferenceListMarker]:
        lists = self._find_reference_lists(text)
        return lists[0] if lists else None

    def _find_reference_lists(self, text: str) -> List[ReferenceListMarker]:
        found: List[ReferenceListMarker] = []
        for match in self.REFERENCE_LIST_PATTERN.finditer(text):
            attributes = self._parse_attributes(match.group("attrs"))
            style = attributes.get("style", "").strip() or None
            found.append(
                ReferenceListMarker(
                    raw_text=match.group(0),
                    style_name=style,
                    position=match.start(),
                    attributes=attributes,
                )
            )
        return found

    @classmethod
    def _parse_attributes(cls, attr_text: str | None) -> Dict[str, str]:
        attributes: Dict[str, str] = {}
        if not attr_text:
            return attributes
        for name, double_quoted, single_quoted in cls.ATTRIBUTE_PATTERN.findall(attr_text):
            value = double_quoted if double_quoted else single_quoted
            attributes.setdefault(name.lower(), html.unescape(value))
        return attributes
