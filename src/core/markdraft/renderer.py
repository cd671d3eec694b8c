from __future__ import annotations

from markdown_it import MarkdownIt

from .models import RenderedDocument

# Raw HTML passes through untouched; deployments that accept untrusted authors
# must sanitize upstream.
RENDER_OPTIONS: dict[str, bool] = {
    "html": True,
    "linkify": True,
    "typographer": True,
    "breaks": True,
}


class MarkdownRenderer:
    """Markdown to HTML fragment conversion with a fixed parser configuration."""

    def __init__(self) -> None:
        self._parser = MarkdownIt("default", RENDER_OPTIONS)

    @property
    def options(self) -> dict[str, object]:
        return dict(self._parser.options)

    def render(self, markdown: str) -> RenderedDocument:
        return RenderedDocument(html_fragment=self._parser.render(markdown))


__all__ = ["MarkdownRenderer", "RENDER_OPTIONS"]
