"""Pipeline step functions: load, check, and build orchestration"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterable, TypeVar

from mdsite.core.errors import MalformedDocument
from mdsite.core.export import clean_output, prune_stale, write_site
from mdsite.core.index import build_index
from mdsite.core.models import BuildReport, Document, SkippedDoc
from mdsite.core.parse import discover_files, parse_file, relative_path
from mdsite.core.render import Site, render_body


logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')


def _map(fn: Callable[[T], R], items: Iterable[T], workers: int) -> list[R]:
    """Ordered map, in a thread pool when workers > 1. Worker exceptions propagate."""
    if workers <= 1:
        return [fn(i) for i in items]
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(fn, items))


def _slug_owners(docs: list[Document]) -> dict[str, Document]:
    """Pick the document that keeps each slug: the first published one, else the first draft."""
    owners: dict[str, Document] = {}
    for doc in docs:
        current = owners.get(doc.slug)
        if current is None or (current.draft and not doc.draft):
            owners[doc.slug] = doc
    return owners


def load_documents(root: Path, workers: int = 1) -> tuple[list[Document], list[SkippedDoc]]:
    """Parse every document under root in discovery order.

    Malformed documents and duplicate slugs are skipped and reported. On a slug
    clash a published document beats a draft; otherwise the first file in sorted
    path order wins. IOFailure propagates.
    """
    files = discover_files(root)

    def _one(path: Path):
        try:
            return parse_file(path, root)
        except MalformedDocument as e:
            return SkippedDoc(path=e.path or relative_path(path, root), reason=e.reason)

    results = _map(_one, files, workers)
    owners = _slug_owners([r for r in results if isinstance(r, Document)])

    docs: list[Document] = []
    skipped: list[SkippedDoc] = []
    for result in results:
        if isinstance(result, SkippedDoc):
            skipped.append(result)
        elif owners[result.slug] is not result:
            skipped.append(SkippedDoc(
                path=result.path,
                reason=f"duplicate slug '{result.slug}' (kept {owners[result.slug].path})",
            ))
        else:
            docs.append(result)

    for s in skipped:
        logger.warning("skipping %s: %s", s.path, s.reason)
    return docs, skipped


def run_check(content_dir: Path, workers: int = 1) -> BuildReport:
    """Parse and index without writing anything."""
    docs, skipped = load_documents(content_dir, workers)
    return BuildReport(documents=docs, skipped=skipped, index=build_index(docs))


def run_build(
    content_dir: Path,
    output_dir: Path,
    parser_config: str = 'gfm-like',
    site: Site = None,
    include_drafts: bool = False,
    workers: int = 1,
    clean: bool = False,
    ) -> BuildReport:
    """Run the full pipeline: parse -> render + index -> write.

    Drafts are never indexed; they get a page only when include_drafts is set.
    Without clean, pages of posts that no longer exist are pruned.
    Raises IOFailure on unreadable input or unwritable output.
    """
    site = site or Site()
    report = run_check(content_dir, workers)
    publish = [d for d in report.documents if include_drafts or not d.draft]

    bodies = _map(lambda d: render_body(d.body, parser_config), publish, workers)

    if clean:
        clean_output(output_dir)
    report.written = write_site(list(zip(publish, bodies)), report.index, output_dir, site)
    if not clean:
        report.pruned = prune_stale(output_dir, report.written)
    logger.info(
        "built %d page(s), %d draft(s), %d skipped",
        len(publish), len(report.drafts), len(report.skipped),
    )
    return report
