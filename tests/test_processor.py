import logging
import re

import pytest

from bibliography.processor import BibliographyProcessor, process_bibliographic_references
from bibliography.reference_finder import ReferenceFinder
from bibliography.registry import ReferenceStyleRegistry, UnknownStyleError
from bibliography.reference_styles import HarvardReferenceStyle
from bibliography.report import render_report


def test_text_without_markers_is_returned_unchanged():
    text = "<p>Plain content with <b>markup</b> and a < sign.</p>"
    result = BibliographyProcessor().process(text)

    assert result.content == text
    assert result.action == "unchanged"
    assert result.style_name is None


def test_references_without_list_are_removed():
    text = "Intro <ref>Smith2020</ref> middle <ref page=\"3\">Jones2019</ref> end <ref>Smith2020</ref>."
    result = BibliographyProcessor().process(text)

    assert result.content == "Intro  middle  end ."
    assert result.action == "stripped-references"


def test_list_without_references_is_removed():
    text = "<p>Body</p>\n<reflist style=\"Harvard\"/>\n<p>Tail</p>"

    assert process_bibliographic_references(text) == "<p>Body</p>\n\n<p>Tail</p>"


def test_list_without_references_does_not_resolve_style():
    text = "Body <reflist style=\"Chicago\"/>"

    assert BibliographyProcessor().process_text(text) == "Body "


def test_rendering_orders_list_and_links_anchors():
    text = 'See <ref>Smith2020</ref> and <ref>Jones2019</ref>. <reflist style="Harvard"/>'
    result = BibliographyProcessor().process(text)
    content = result.content

    assert result.action == "rendered"
    assert result.style_name == "Harvard"
    assert "<ref>" not in content
    assert "<reflist" not in content
    assert content.startswith('See <a class="citation" id="cite-Smith2020" href="#ref-Smith2020">(Smith, 2020)</a> and ')
    assert content.index('id="ref-Jones2019"') < content.index('id="ref-Smith2020"')
    for citation_anchor in re.findall(r'class="citation" id="cite-([^"]+)" href="#ref-([^"]+)"', content):
        assert citation_anchor[0] == citation_anchor[1]
        assert f'id="ref-{citation_anchor[1]}"' in content
        assert f'href="#cite-{citation_anchor[0]}"' in content


def test_rendering_preserves_surrounding_content(sample_document):
    content = BibliographyProcessor().process_text(sample_document)

    assert content.startswith("<h1>Testing citation pipelines</h1>\n<p>Early approaches ")
    assert content.endswith("\n<footer>end</footer>")
    assert " were extended by later studies " in content
    assert '<h2 class="bibliography-title">References</h2>' in content


def test_repeated_citations_share_label_and_single_anchor(sample_document):
    content = BibliographyProcessor().process_text(sample_document)

    assert content.count('id="cite-Smith2020"') == 1
    assert content.count('<a class="citation" href="#ref-Smith2020">(Smith, 2020)</a>') == 1
    assert content.index('id="cite-Smith2020"') < content.index('<a class="citation" href="#ref-Smith2020">')
    assert content.count("(Smith, 2020)") == 2
    assert "(Adams, 2021, pp. 12-15)" in content


def test_rendered_list_recovers_all_keys(sample_document):
    scan = ReferenceFinder().scan(sample_document)
    content = BibliographyProcessor().process_text(sample_document)

    keys = re.findall(r'data-key="([^"]+)"', content)
    assert sorted(keys) == sorted(set(scan.distinct_keys()))
    assert keys == ["Adams2021", "Jones2019", "Smith2020"]


def test_default_style_applies_when_list_has_none():
    text = "<ref>Doe2021</ref><reflist/>"
    result = BibliographyProcessor().process(text)

    assert result.style_name == "Harvard"
    assert 'data-key="Doe2021"' in result.content


def test_unknown_style_raises_before_substitution():
    text = "<ref>Doe2021</ref><reflist style=\"Vancouver\"/>"

    with pytest.raises(UnknownStyleError):
        BibliographyProcessor().process_text(text)


def test_unknown_default_style_raises():
    processor = BibliographyProcessor(default_style="APA")

    with pytest.raises(UnknownStyleError):
        processor.process_text("<ref>Doe2021</ref><reflist/>")


def test_custom_registry_is_used():
    class ShoutingStyle(HarvardReferenceStyle):
        name = "Shouting"

        def render_reference(self, marker, anchored=True):
            return marker.identity_key.upper()

    registry = ReferenceStyleRegistry([ShoutingStyle()])
    text = "Cite <ref>Doe2021</ref>. <reflist style=\"Shouting\"/>"

    content = BibliographyProcessor(registry=registry).process_text(text)

    assert content.startswith("Cite DOE2021. ")


def test_extra_reference_lists_are_removed(caplog):
    text = "<ref>Doe2021</ref>\n<reflist/>\n<reflist/>"

    with caplog.at_level(logging.WARNING, logger="bibliography.processor"):
        content = BibliographyProcessor().process_text(text)

    assert content.count("<ul") == 1
    assert "<reflist" not in content
    assert "additional reference list" in caplog.text


def test_report_summarizes_rendering(sample_document):
    result = BibliographyProcessor().process(sample_document)
    report = render_report(result)

    assert "Reference markers detected: 4" in report
    assert "Distinct references: 3" in report
    assert "Style applied: Harvard" in report
    assert "- Jones2019" in report


def test_report_for_unchanged_text():
    report = render_report(BibliographyProcessor().process("nothing"))

    assert "Reference list: absent" in report
    assert "content left unchanged" in report


def test_citations_of_one_key_use_merged_details():
    text = '<ref author="Smith, J.; Lee, B.">SL2020</ref> then <ref>SL2020</ref> <reflist/>'
    content = BibliographyProcessor().process_text(text)

    labels = re.findall(r'class="citation"[^>]*>\(([^)]*)\)</a>', content)
    assert labels == ["Smith and Lee, 2020", "Smith and Lee, 2020"]
    assert "Smith, J. and Lee, B. (2020)" in content


def test_details_given_on_later_citation_apply_to_earlier_one():
    text = '<ref>Doe2021</ref> and <ref author="Roe, R." page="4">Doe2021</ref> <reflist/>'
    content = BibliographyProcessor().process_text(text)

    labels = re.findall(r'class="citation"[^>]*>\(([^)]*)\)</a>', content)
    assert labels == ["Roe, 2021", "Roe, 2021, p. 4"]


def test_numeric_keys_render_verbatim():
    content = BibliographyProcessor().process_text("<ref>12345</ref> <ref>2020</ref><reflist/>")

    labels = re.findall(r'class="citation"[^>]*>\(([^)]*)\)</a>', content)
    assert labels == ["12345", "2020"]
    assert 'data-key="12345"' in content
