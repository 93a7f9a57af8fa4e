"""Markdown body rendering and HTML page templating"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from jinja2 import DictLoader, Environment, StrictUndefined, select_autoescape
from markdown_it import MarkdownIt
from markupsafe import Markup

from mdsite.core.models import Document, Index
from mdsite.core.templates import TEMPLATES
from mdsite.core.utils.slug import slugify


@dataclass(frozen=True)
class Site:
    """Site-wide values available to every template."""
    title:    str = "mdsite"
    base_url: str = "/"

    def url(self, *parts: str) -> str:
        """Join path parts onto base_url."""
        return self.base_url.rstrip('/') + '/' + '/'.join(parts)


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        loader=DictLoader(TEMPLATES),
        autoescape=select_autoescape(["html"]),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


def render_body(body: str, preset: str = 'gfm-like') -> str:
    """Render a markdown body to HTML.

    Pure and deterministic. Unbalanced or otherwise malformed inline markup is
    emitted as literal text rather than raising.
    """
    return _make_parser(preset).render(body)


def term_links(site: Site, kind: str, terms, indexed=None) -> list[tuple[str, Optional[str]]]:
    """Sorted (term, href) pairs for a document's tags or categories.

    When `indexed` is given, terms without an index page get href None.
    """
    return [
        (t, site.url(kind, f"{slugify(t, fallback='term')}.html") if indexed is None or t in indexed else None)
        for t in sorted(terms)
    ]


def render_post(doc: Document, html: str, site: Site, index: Index = None) -> str:
    """Wrap a rendered body in the post page template.

    With an index, only tags/categories that have a listing page are linked.
    """
    return _environment().get_template("post.html").render(
        site=site,
        post=doc,
        content=Markup(html),
        tags=term_links(site, "tags", doc.tags, index.tags if index is not None else None),
        categories=term_links(site, "categories", doc.categories, index.categories if index is not None else None),
    )


def render_listing(heading: str, posts: list[Document], site: Site) -> str:
    """Render an ordered list of posts (home page, tag page, category page)."""
    return _environment().get_template("listing.html").render(
        site=site, heading=heading, posts=posts,
    )
