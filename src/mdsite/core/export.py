"""Export: write post pages, listing pages, and the index.json sidecar"""

import json
import logging
import shutil
from pathlib import Path

from mdsite.core.errors import IOFailure
from mdsite.core.models import Document, Index
from mdsite.core.render import Site, render_listing, render_post
from mdsite.core.utils.slug import slugify


logger = logging.getLogger(__name__)


def _write(path: Path, text: str) -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding='utf-8')
    except OSError as e:
        raise IOFailure(f"Failed to write {path}: {e}") from e
    return path


def term_pages(terms: dict[str, tuple[str, ...]], order: tuple[str, ...]) -> dict[str, tuple[str, list[str]]]:
    """Group index terms by page slug: {page_slug: (heading, ordered post slugs)}.

    Terms that slugify to the same page (e.g. 'Azure' and 'azure') share one page,
    headed by the lexically first term, with posts kept in index order.
    """
    rank = {slug: i for i, slug in enumerate(order)}
    pages: dict[str, tuple[str, set[str]]] = {}
    for term in sorted(terms):
        page = slugify(term, fallback='term')
        heading, slugs = pages.setdefault(page, (term, set()))
        slugs.update(terms[term])
    return {
        page: (heading, sorted(slugs, key=rank.__getitem__))
        for page, (heading, slugs) in sorted(pages.items())
    }


def build_sidecar(index: Index, docs_by_slug: dict[str, Document], site: Site) -> dict:
    """Machine-readable index: ordered posts plus tag/category mappings."""
    return {
        "site": {"title": site.title, "base_url": site.base_url},
        "posts": [
            {
                "slug": slug,
                "title": docs_by_slug[slug].title,
                "date": docs_by_slug[slug].date.isoformat(),
                "path": docs_by_slug[slug].path,
                "url": site.url("posts", f"{slug}.html"),
                "categories": sorted(docs_by_slug[slug].categories),
                "tags": sorted(docs_by_slug[slug].tags),
            }
            for slug in index.posts
        ],
        "tags": {k: list(v) for k, v in index.tags.items()},
        "categories": {k: list(v) for k, v in index.categories.items()},
    }


def clean_output(output_dir: Path) -> None:
    """Remove a previous build's output directory."""
    if not output_dir.exists():
        return
    try:
        shutil.rmtree(output_dir)
    except OSError as e:
        raise IOFailure(f"Failed to clean {output_dir}: {e}") from e
    logger.info("removed %s", output_dir)


GENERATED_DIRS = ("posts", "tags", "categories")


def prune_stale(output_dir: Path, written: list[Path]) -> list[Path]:
    """Delete generated pages left over from earlier builds (e.g. removed posts).

    Only *.html files under posts/, tags/ and categories/ are considered.
    """
    keep = set(written)
    removed = []
    for kind in GENERATED_DIRS:
        for page in sorted((output_dir / kind).glob("*.html")):
            if page in keep:
                continue
            try:
                page.unlink()
            except OSError as e:
                raise IOFailure(f"Failed to remove stale page {page}: {e}") from e
            removed.append(page)
    if removed:
        logger.info("removed %d stale page(s) from %s", len(removed), output_dir)
    return removed


def write_site(
    pages: list[tuple[Document, str]],
    index: Index,
    output_dir: Path,
    site: Site,
    ) -> list[Path]:
    """Write every output file for a build.

    `pages` pairs each document to publish with its rendered body HTML. Layout:
      output_dir/index.html, posts/<slug>.html, tags/<term>.html,
      categories/<term>.html, index.json

    Returns written paths in write order.
    """
    docs_by_slug = {doc.slug: doc for doc, _ in pages}
    written = []

    for doc, html in pages:
        written.append(_write(output_dir / "posts" / f"{doc.slug}.html", render_post(doc, html, site, index)))

    listed = [docs_by_slug[s] for s in index.posts]
    written.append(_write(output_dir / "index.html", render_listing(site.title, listed, site)))

    for kind, terms in (("tags", index.tags), ("categories", index.categories)):
        for page, (heading, slugs) in term_pages(terms, index.posts).items():
            posts = [docs_by_slug[s] for s in slugs]
            written.append(_write(output_dir / kind / f"{page}.html", render_listing(heading, posts, site)))

    written.append(_write(
        output_dir / "index.json",
        json.dumps(build_sidecar(index, docs_by_slug, site), indent=2, ensure_ascii=False) + "\n",
    ))
    logger.info("wrote %d file(s) to %s", len(written), output_dir)
    return written
