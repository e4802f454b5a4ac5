"""High-level orchestrator turning reference markers into rendered citations."""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Set

from .models import (
    CITATION_ATTRIBUTES,
    ProcessingResult,
    ReferenceListMarker,
    ReferenceMarker,
    ReferenceScan,
)
from .reference_finder import ReferenceFinder
from .reference_styles import ReferenceStyle
from .registry import DEFAULT_REGISTRY, DEFAULT_STYLE, ReferenceStyleRegistry

logger = logging.getLogger(__name__)

UNCHANGED = "unchanged"
STRIPPED_REFERENCES = "stripped-references"
STRIPPED_REFERENCE_LIST = "stripped-reference-list"
RENDERED = "rendered"


class BibliographyProcessor:
    """Coordinates finding, style resolution and substitution for one document."""

    def __init__(
        self,
        registry: ReferenceStyleRegistry | None = None,
        default_style: str = DEFAULT_STYLE,
        finder: ReferenceFinder | None = None,
    ):
        self.registry = registry or DEFAULT_REGISTRY
        self.default_style = default_style
        self.finder = finder or ReferenceFinder()

    def process_text(self, text: str) -> str:
        return self.process(text).content

    def process(self, text: str) -> ProcessingResult:
        scan = self.finder.scan(text)
        reference_list = scan.reference_list

        if not scan.contains_any_references and reference_list is None:
            return ProcessingResult(content=text, action=UNCHANGED, scan=scan)

        if reference_list is None:
            logger.debug("No reference list marker, removing in-text references")
            content = remove_all_substrings(text, scan.distinct_raw_texts())
            return ProcessingResult(content=content, action=STRIPPED_REFERENCES, scan=scan)

        if not scan.contains_any_references:
            logger.debug("No references to list, removing reference list marker")
            content = remove_all_substrings(text, _list_raw_texts(scan))
            return ProcessingResult(content=content, action=STRIPPED_REFERENCE_LIST, scan=scan)

        style = self.resolve_style(reference_list)
        content = self._render(text, scan, reference_list, style)
        return ProcessingResult(content=content, action=RENDERED, scan=scan, style_name=style.name)

    def resolve_style(self, reference_list: ReferenceListMarker) -> ReferenceStyle:
        """Return the style named by the list marker, or the configured default."""
        return self.registry.get(reference_list.style_name or self.default_style)

    def _render(
        self,
        text: str,
        scan: ReferenceScan,
        reference_list: ReferenceListMarker,
        style: ReferenceStyle,
    ) -> str:
        sorted_references = style.sort_references(scan.references)

        # one replacement per distinct raw text, details resolved per identity key
        first_by_raw: Dict[str, ReferenceMarker] = {}
        for marker in scan.references:
            first_by_raw.setdefault(marker.raw_text, marker)
        shared = scan.shared_attributes()
        anchored_keys: Set[str] = set()
        content = text
        for raw_text, marker in first_by_raw.items():
            key = marker.identity_key
            attributes = dict(shared[key])
            attributes.update(
                (name, value) for name, value in marker.attributes.items() if name in CITATION_ATTRIBUTES
            )
            resolved = replace(marker, attributes=attributes)
            # the earliest citation of a key carries the id the list links back to
            if key not in anchored_keys:
                content = content.replace(raw_text, style.render_reference(resolved), 1)
                anchored_keys.add(key)
            content = content.replace(raw_text, style.render_reference(resolved, anchored=False))

        rendered_list = style.render_reference_list(reference_list, sorted_references)
        content = content.replace(reference_list.raw_text, rendered_list, 1)

        if scan.extra_reference_lists:
            logger.warning(
                "Document contains %d additional reference list markers; only the first is rendered",
                len(scan.extra_reference_lists),
            )
            content = remove_all_substrings(
                content, [extra.raw_text for extra in scan.extra_reference_lists]
            )

        logger.debug(
            "Rendered %d references (%d distinct) with style %s",
            len(scan.references),
            len(scan.distinct_keys()),
            style.name,
        )
        return content


def remove_all_substrings(content: str, substrings: Iterable[str]) -> str:
    for substring in substrings:
        content = content.replace(substring, "")
    return content


def _list_raw_texts(scan: ReferenceScan) -> List[str]:
    markers = [scan.reference_list] if scan.reference_list else []
    markers.extend(scan.extra_reference_lists)
    return [marker.raw_text for marker in markers]


def process_bibliographic_references(
    text: str,
    registry: ReferenceStyleRegistry | None = None,
    default_style: str = DEFAULT_STYLE,
) -> str:
    """Process a single document's text with a fresh processor."""
    return BibliographyProcessor(registry=registry, default_style=default_style).process_text(text)
