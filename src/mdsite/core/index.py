"""Navigation index: tag/category -> ordered slugs, drafts excluded"""

from collections import defaultdict
from typing import Iterable

from mdsite.core.models import Document, Index


def sort_documents(docs: Iterable[Document]) -> list[Document]:
    """Newest first; equal dates fall back to ascending slug."""
    by_slug = sorted(docs, key=lambda d: d.slug)
    return sorted(by_slug, key=lambda d: d.date, reverse=True)


def build_index(docs: Iterable[Document]) -> Index:
    """Build the Index from parsed documents. Deterministic for identical input."""
    published = sort_documents(d for d in docs if not d.draft)
    tags: dict[str, list[str]] = defaultdict(list)
    categories: dict[str, list[str]] = defaultdict(list)

    for doc in published:
        for tag in doc.tags:
            tags[tag].append(doc.slug)
        for cat in doc.categories:
            categories[cat].append(doc.slug)

    return Index(
        posts=tuple(d.slug for d in published),
        tags={k: tuple(tags[k]) for k in sorted(tags)},
        categories={k: tuple(categories[k]) for k in sorted(categories)},
    )
