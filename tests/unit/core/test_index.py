"""Unit tests for core/index.py"""

import random
from datetime import datetime

from mdsite.core.index import build_index, sort_documents
from mdsite.core.models import Document


def _doc(slug, date, tags=(), categories=(), draft=False) -> Document:
    return Document(
        slug=slug, path=f"{slug}.md", title=slug.title(), date=date, body="",
        tags=frozenset(tags), categories=frozenset(categories), draft=draft,
    )


DOCS = [
    _doc("aks-upgrades", datetime(2023, 3, 1), tags=["azure", "kubernetes"], categories=["Azure"]),
    _doc("scheduler", datetime(2023, 3, 1), tags=["kubernetes"], categories=["Kubernetes"]),
    _doc("generators", datetime(2024, 1, 10), tags=["dotnet"], categories=[".NET"]),
    _doc("async", datetime(2024, 2, 1), tags=["dotnet", "secret"], categories=[".NET"], draft=True),
]


def test_sort_documents_newest_first_ties_by_slug():
    ordered = sort_documents(DOCS)
    assert [d.slug for d in ordered] == ["async", "generators", "aks-upgrades", "scheduler"]


def test_build_index_excludes_drafts():
    index = build_index(DOCS)
    assert "async" not in index.posts
    assert "secret" not in index.tags
    assert all("async" not in slugs for slugs in index.tags.values())
    assert all("async" not in slugs for slugs in index.categories.values())


def test_build_index_orders_terms_and_posts():
    index = build_index(DOCS)
    assert index.posts == ("generators", "aks-upgrades", "scheduler")
    assert list(index.tags) == ["azure", "dotnet", "kubernetes"]
    assert index.tags["kubernetes"] == ("aks-upgrades", "scheduler")
    assert index.categories == {
        ".NET": ("generators",),
        "Azure": ("aks-upgrades",),
        "Kubernetes": ("scheduler",),
    }


def test_build_index_independent_of_input_order():
    """Shuffled input yields an identical index."""
    expected = build_index(DOCS)
    for seed in range(5):
        shuffled = DOCS[:]
        random.Random(seed).shuffle(shuffled)
        assert build_index(shuffled) == expected


def test_build_index_empty():
    index = build_index([])
    assert index.posts == ()
    assert index.tags == {}
    assert index.categories == {}
