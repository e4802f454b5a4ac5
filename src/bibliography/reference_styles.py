"""Citation styles: ordering and rendering rules for references."""
from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence
from xml.sax.saxutils import escape, quoteattr

from .models import ReferenceListMarker, ReferenceMarker, merge_attributes
from .normalization import anchor_slug, split_authors, split_key, surname


class ReferenceStyle:
    """Base interface for citation styles."""

    name: str = "base"

    def sort_references(self, markers: Sequence[ReferenceMarker]) -> List[ReferenceMarker]:  # pragma: no cover - interface
        raise NotImplementedError

    def render_reference(self, marker: ReferenceMarker, anchored: bool = True) -> str:  # pragma: no cover - interface
        raise NotImplementedError

    def render_reference_list(
        self, list_marker: ReferenceListMarker, markers: Sequence[ReferenceMarker]
    ) -> str:  # pragma: no cover - interface
        raise NotImplementedError


class HarvardReferenceStyle(ReferenceStyle):
    """Author-date style with alphabetical bibliography.

    In-text citations become ``(Smith, 2020)`` links to the matching list
    entry, and every list entry links back to its in-text citation.
    """

    name = "Harvard"

    DETAIL_FIELDS = ("author", "year", "title", "source", "url")
    PAGE_RANGE = re.compile(r"\d\s*[-–]\s*\d|,")

    def __init__(self, citation_prefix: str = "cite-", entry_prefix: str = "ref-"):
        self.citation_prefix = citation_prefix
        self.entry_prefix = entry_prefix

    def sort_references(self, markers: Sequence[ReferenceMarker]) -> List[ReferenceMarker]:
        return sorted(markers, key=lambda m: (m.identity_key.casefold(), m.identity_key))

    def render_reference(self, marker: ReferenceMarker, anchored: bool = True) -> str:
        anchor = anchor_slug(marker.identity_key)
        label = self._in_text_label(marker)
        target = f' id="{self.citation_prefix}{anchor}"' if anchored else ""
        return (
            f'<a class="citation"{target} '
            f'href="#{self.entry_prefix}{anchor}">({escape(label)})</a>'
        )

    def render_reference_list(
        self, list_marker: ReferenceListMarker, markers: Sequence[ReferenceMarker]
    ) -> str:
        details = merge_attributes(markers, self.DETAIL_FIELDS)
        lines: List[str] = []
        heading = list_marker.attributes.get("title", "").strip()
        if heading:
            lines.append(f'<h2 class="bibliography-title">{escape(heading)}</h2>')
        lines.append('<ul class="bibliography harvard">')
        for key, fields in details.items():
            anchor = anchor_slug(key)
            lines.append(
                f'<li id="{self.entry_prefix}{anchor}" data-key={quoteattr(key)}>'
                f"{self._entry_text(key, fields)} "
                f'<a class="backlink" href="#{self.citation_prefix}{anchor}">&#8617;</a></li>'
            )
        lines.append("</ul>")
        return "\n".join(lines)

    def _authors_and_year(self, key: str, fields: Dict[str, str]):
        key_author, key_year = split_key(key)
        authors = split_authors(fields.get("author")) or ([key_author] if key_author else [])
        return authors, fields.get("year") or key_year

    def _in_text_label(self, marker: ReferenceMarker) -> str:
        fields = {name: marker.attribute(name) for name in ("author", "year")}
        authors, year = self._authors_and_year(
            marker.identity_key, {k: v for k, v in fields.items() if v}
        )
        if not authors or not year:
            label = marker.identity_key
        else:
            label = f"{self._short_authors(authors)}, {year}"
        page = marker.attribute("page")
        if page:
            prefix = "pp." if self.PAGE_RANGE.search(page) else "p."
            label = f"{label}, {prefix} {page}"
        return label

    @staticmethod
    def _short_authors(authors: List[str]) -> str:
        names = [surname(author) for author in authors]
        if len(names) == 1:
            return names[0]
        if len(names) == 2:
            return f"{names[0]} and {names[1]}"
        return f"{names[0]} et al."

    def _entry_text(self, key: str, fields: Dict[str, str]) -> str:
        authors, year = self._authors_and_year(key, fields)
        head = escape(self._full_authors(authors)) if authors else escape(key)
        if year:
            head = f"{head} ({escape(year)})"
        components = [head]
        title: Optional[str] = fields.get("title")
        if title:
            components.append(f"<em>{escape(title.rstrip('.'))}</em>.")
        source = fields.get("source")
        if source:
            components.append(f"{escape(source.rstrip('.'))}.")
        url = fields.get("url")
        if url:
            components.append(f"Available at: <a href={quoteattr(url)}>{escape(url)}</a>.")
        return " ".join(components)

    @staticmethod
    def _full_authors(authors: List[str]) -> str:
        if len(authors) == 1:
            return authors[0]
        return ", ".join(authors[:-1]) + " and " + authors[-1]
