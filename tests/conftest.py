"""Root test configuration: a small blog content tree shared across tests"""

from pathlib import Path

import pytest


def post(title: str, date: str, tags=(), categories=(), draft: bool = False, body: str = "Body.\n", **extra) -> str:
    """Return document text with a YAML frontmatter header."""
    lines = ["---", f"title: {title}", f"date: {date}"]
    if tags:
        lines.append(f"tags: [{', '.join(tags)}]")
    if categories:
        lines.append(f"categories: [{', '.join(categories)}]")
    if draft:
        lines.append("draft: true")
    for k, v in extra.items():
        lines.append(f"{k}: {v}")
    lines.append("---")
    return "\n".join(lines) + "\n\n" + body


@pytest.fixture(name="content_dir")
def content_dir_fixture(tmp_path) -> Path:
    """Content tree with published posts, a draft, and one malformed file."""
    root = tmp_path / "content"
    (root / "kubernetes").mkdir(parents=True)
    (root / "dotnet").mkdir()

    (root / "kubernetes" / "scheduler-basics.md").write_text(post(
        "Scheduler basics", "2023-03-01", tags=["kubernetes", "scheduling"], categories=["Kubernetes"],
        body="# Scheduler\n\nPods are *bound* to nodes.\n",
    ))
    (root / "kubernetes" / "aks-upgrades.md").write_text(post(
        "AKS upgrades", "2023-03-01", tags=["kubernetes", "azure"], categories=["Azure"],
    ))
    (root / "dotnet" / "source-generators.md").write_text(post(
        "Source generators", "2024-01-10", tags=["dotnet", "roslyn"], categories=[".NET"],
        body="```csharp\n[Generator]\npublic class Gen {}\n```\n",
    ))
    (root / "dotnet" / "async-internals.md").write_text(post(
        "Async internals", "2024-02-01", tags=["dotnet"], categories=[".NET"], draft=True,
    ))
    (root / "notes.md").write_text("# No frontmatter here\n")
    return root


@pytest.fixture(name="make_post")
def make_post_fixture():
    """Factory for document text; see post()."""
    return post
