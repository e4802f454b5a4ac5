"""Data models for bibliography processing."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

# Attributes describing one citation occurrence rather than the cited work.
CITATION_ATTRIBUTES = ("page",)


@dataclass
class ReferenceMarker:
    """Represents an in-text reference marker such as ``<ref>Smith2020</ref>``."""

    raw_text: str
    identity_key: str
    position: int = 0
    attributes: Dict[str, str] = field(default_factory=dict)

    def attribute(self, name: str) -> Optional[str]:
        value = self.attributes.get(name)
        if value is None:
            return None
        value = value.strip()
        return value or None


@dataclass
class ReferenceListMarker:
    """Represents the placeholder where the bibliography is rendered."""

    raw_text: str
    style_name: Optional[str] = None
    position: int = 0
    attributes: Dict[str, str] = field(default_factory=dict)


@dataclass
class ReferenceScan:
    """Container for everything the finder located in one document."""

    references: List[ReferenceMarker] = field(default_factory=list)
    reference_list: Optional[ReferenceListMarker] = None
    extra_reference_lists: List[ReferenceListMarker] = field(default_factory=list)

    @property
    def contains_any_references(self) -> bool:
        return bool(self.references)

    def distinct_raw_texts(self) -> List[str]:
        """Return marker raw texts in document order without repeats."""
        seen: Dict[str, None] = {}
        for marker in self.references:
            seen.setdefault(marker.raw_text, None)
        return list(seen)

    def distinct_keys(self) -> List[str]:
        seen: Dict[str, None] = {}
        for marker in self.references:
            seen.setdefault(marker.identity_key, None)
        return list(seen)

    def shared_attributes(self) -> Dict[str, Dict[str, str]]:
        """Return per-key attributes merged across every citation of that key."""
        names = {name for marker in self.references for name in marker.attributes}
        names.difference_update(CITATION_ATTRIBUTES)
        return merge_attributes(self.references, sorted(names))


@dataclass
class ProcessingResult:
    """Outcome of processing a single document."""

    content: str
    action: str
    scan: ReferenceScan
    style_name: Optional[str] = None


def merge_attributes(
    markers: Iterable[ReferenceMarker], names: Sequence[str]
) -> Dict[str, Dict[str, str]]:
    """Collapse attributes of markers sharing an identity key, first non-empty value wins."""
    merged: Dict[str, Dict[str, str]] = {}
    for marker in markers:
        fields = merged.setdefault(marker.identity_key, {})
        for name in names:
            value = marker.attribute(name)
            if value and name not in fields:
                fields[name] = value
    return merged
