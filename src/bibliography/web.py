"""FastAPI + Tailwind interface for previewing rendered bibliographies.

Run with:
    uvicorn bibliography.web:app --reload
"""
from __future__ import annotations

from typing import List, Optional
from xml.sax.saxutils import escape, quoteattr

from fastapi import FastAPI, Form, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from .processor import BibliographyProcessor
from .registry import DEFAULT_REGISTRY, DEFAULT_STYLE, UnknownStyleError
from .report import render_report

app = FastAPI(title="Bibliography", description="Render citations and reference lists from the browser")

SAMPLE_TEXT = (
    '<p>Earlier work <ref author="Smith, J." title="Citation practice">Smith2020</ref> '
    "extends <ref>Jones2019</ref>.</p>\n<reflist style=\"Harvard\"/>"
)


class RenderRequest(BaseModel):
    content: str
    default_style: Optional[str] = None


class RenderResponse(BaseModel):
    content: str
    action: str
    style: Optional[str] = None
    references: List[str] = []


def _build_processor(default_style: str | None) -> BibliographyProcessor:
    return BibliographyProcessor(default_style=default_style or DEFAULT_STYLE)


def _layout(content: str) -> str:
    """Wrap provided content in a Tailwind-powered HTML page."""

    return f"""
    <!doctype html>
    <html lang=\"en\" class=\"h-full bg-gray-50\">
    <head>
        <meta charset=\"utf-8\" />
        <title>Bibliography</title>
        <link href=\"https://cdn.jsdelivr.net/npm/tailwindcss@3.4.4/dist/tailwind.min.css\" rel=\"stylesheet\" />
    </head>
    <body class=\"min-h-full py-10\">
        <div class=\"max-w-5xl mx-auto px-4\">
            <div class=\"bg-white shadow rounded-lg p-6\">
                <h1 class=\"text-3xl font-semibold text-gray-900\">Bibliography</h1>
                <p class=\"text-gray-600 mt-2\">Paste content containing <code>&lt;ref&gt;</code> markers and a <code>&lt;reflist/&gt;</code> placeholder to see the rendered citations and reference list.</p>
                {content}
            </div>
        </div>
    </body>
    </html>
    """


def _form_page(
    text: str = "",
    selected_style: str = DEFAULT_STYLE,
    report: str | None = None,
    rendered: str | None = None,
) -> str:
    """Render the landing page with optional report and rendered output."""

    options = "".join(
        f"<option value=\"{escape(name)}\"{' selected' if name == selected_style else ''}>{escape(name)}</option>"
        for name in DEFAULT_REGISTRY.names()
    )

    text_form = f"""
    <form action=\"/render-text\" method=\"post\" class=\"bg-gray-50 border border-gray-200 rounded-lg p-4 mt-6\">
        <h2 class=\"text-xl font-semibold text-gray-800\">Document Content</h2>
        <label class=\"block text-sm font-medium text-gray-700 mb-2\" for=\"text\">Content</label>
        <textarea name=\"text\" required placeholder={quoteattr(SAMPLE_TEXT)} class=\"w-full h-44 border border-gray-300 rounded-md p-3 text-sm font-mono\">{escape(text)}</textarea>
        <label class=\"block text-sm font-medium text-gray-700 mt-3 mb-2\" for=\"style\">Default style</label>
        <select name=\"style\" id=\"style\" class=\"border border-gray-300 rounded-md p-2 text-sm\">{options}</select>
        <button type=\"submit\" class=\"mt-4 inline-flex items-center px-4 py-2 bg-indigo-600 text-white rounded-md shadow hover:bg-indigo-700\">Render</button>
    </form>
    """

    report_block = ""
    if report:
        report_block = f"""
        <div class=\"mt-8\">
            <h2 class=\"text-xl font-semibold text-gray-800\">Processing Report</h2>
            <pre class=\"mt-3 bg-gray-900 text-green-100 p-4 rounded-lg whitespace-pre-wrap text-sm\">{escape(report)}</pre>
        </div>
        """

    rendered_block = ""
    if rendered is not None:
        rendered_block = f"""
        <div class=\"mt-8\">
            <h2 class=\"text-xl font-semibold text-gray-800\">Rendered Markup</h2>
            <pre class=\"mt-3 bg-gray-100 text-gray-800 p-4 rounded-lg whitespace-pre-wrap text-sm\">{escape(rendered)}</pre>
            <h2 class=\"text-xl font-semibold text-gray-800 mt-6\">Preview</h2>
            <div class=\"mt-3 border border-gray-200 rounded-lg p-4 prose\">{rendered}</div>
        </div>
        """

    return _layout(text_form + report_block + rendered_block)


@app.get("/", response_class=HTMLResponse)
async def home() -> HTMLResponse:
    """Serve the text submission form."""

    return HTMLResponse(_form_page())


@app.post("/render-text", response_class=HTMLResponse)
async def render_text(text: str = Form(...), style: str = Form(DEFAULT_STYLE)) -> HTMLResponse:
    """Process pasted content and show the rendered result with a report."""

    processor = _build_processor(style)
    try:
        result = processor.process(text)
    except UnknownStyleError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return HTMLResponse(
        _form_page(text, selected_style=style, report=render_report(result), rendered=result.content)
    )


@app.post("/api/render", response_model=RenderResponse)
async def render_api(request: RenderRequest) -> RenderResponse:
    """Process content and return the rendered text as JSON."""

    processor = _build_processor(request.default_style)
    try:
        result = processor.process(request.content)
    except UnknownStyleError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return RenderResponse(
        content=result.content,
        action=result.action,
        style=result.style_name,
        references=result.scan.distinct_keys(),
    )


def main() -> None:
    """Run the FastAPI app using uvicorn."""

    import uvicorn

    uvicorn.run("bibliography.web:app", host="0.0.0.0", port=8000, reload=False)


__all__ = ["app", "main"]
