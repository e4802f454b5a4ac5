import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

import pytest


@pytest.fixture()
def sample_document() -> str:
    """Short article body citing three sources, one of them twice."""

    return (
        "<h1>Testing citation pipelines</h1>\n"
        '<p>Early approaches <ref author="Smith, J." year="2020" title="Citation practice" '
        'source="Journal of Testing">Smith2020</ref> were extended by later studies '
        "<ref>Jones2019</ref>.</p>\n"
        '<p>A survey <ref page="12-15">Adams2021</ref> revisits <ref>Smith2020</ref>.</p>\n'
        '<reflist style="Harvard" title="References"/>\n'
        "<footer>end</footer>"
    )
