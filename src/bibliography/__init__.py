"""Citation and bibliography rendering for document content."""

from .models import ProcessingResult, ReferenceListMarker, ReferenceMarker, ReferenceScan
from .processor import BibliographyProcessor, process_bibliographic_references
from .reference_finder import ReferenceFinder
from .reference_styles import HarvardReferenceStyle, ReferenceStyle
from .registry import (
    DEFAULT_REGISTRY,
    ReferenceStyleRegistry,
    UnknownStyleError,
    get_style,
)

__all__ = [
    "BibliographyProcessor",
    "process_bibliographic_references",
    "ReferenceFinder",
    "ReferenceMarker",
    "ReferenceListMarker",
    "ReferenceScan",
    "ProcessingResult",
    "ReferenceStyle",
    "HarvardReferenceStyle",
    "ReferenceStyleRegistry",
    "DEFAULT_REGISTRY",
    "UnknownStyleError",
    "get_style",
]
