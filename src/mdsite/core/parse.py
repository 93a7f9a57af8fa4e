"""File discovery, frontmatter extraction, and Document validation"""

import logging
import re
from pathlib import Path, PurePosixPath
from typing import Any

import yaml
from pydantic import ValidationError

from mdsite.core.errors import IOFailure, MalformedDocument
from mdsite.core.models import Document, Frontmatter
from mdsite.core.utils.slug import slugify


logger = logging.getLogger(__name__)

DELIMITER = '---'
FRONTMATTER_RE = re.compile(r'^---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)', re.DOTALL)
MD_EXTENSIONS = {'.md', '.mdx'}
BUNDLE_STEMS = {'index', 'readme'}


def _format_validation_error(exc: ValidationError) -> str:
    """Flatten pydantic errors into 'field: message; ...'."""
    parts = []
    for err in exc.errors():
        loc = '.'.join(str(p) for p in err['loc']) or 'frontmatter'
        parts.append(f"{loc}: {err['msg']}")
    return '; '.join(parts)


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body). Raises MalformedDocument if the header is missing or invalid."""
    text = text.lstrip('\ufeff')
    m = FRONTMATTER_RE.match(text)
    if not m:
        if text.startswith(DELIMITER):
            raise MalformedDocument(f"unterminated frontmatter block (no closing '{DELIMITER}')")
        raise MalformedDocument(f"missing frontmatter delimiter '{DELIMITER}'")
    try:
        fm = yaml.safe_load(m.group(1) or '') or {}
    except yaml.YAMLError as e:
        raise MalformedDocument(f"invalid YAML frontmatter: {e}") from e
    if not isinstance(fm, dict):
        raise MalformedDocument(f"invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
    return fm, text[m.end():]


def _default_slug(path: str) -> str:
    """Slug from the file stem, or the parent directory for index.md / README.md bundles."""
    p = PurePosixPath(path)
    stem = p.stem
    if stem.lower() in BUNDLE_STEMS and p.parent.name:
        stem = p.parent.name
    return slugify(stem)


def parse_text(text: str, path: str) -> Document:
    """Parse raw document text into a Document. `path` is the content-relative source path."""
    raw_fm, body = split_frontmatter(text)
    try:
        fm = Frontmatter.model_validate(raw_fm)
    except ValidationError as e:
        raise MalformedDocument(_format_validation_error(e)) from e

    slug = slugify(fm.slug) if fm.slug else _default_slug(path)
    if not slug:
        raise MalformedDocument("cannot derive a slug from the file name; set 'slug' in frontmatter")

    return Document(
        slug=slug,
        path=path,
        title=fm.title,
        date=fm.date,
        categories=fm.categories,
        tags=fm.tags,
        draft=fm.draft,
        body=body,
        extra=dict(fm.model_extra or {}),
    )


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md/.mdx files under path, or [path] if a single file."""
    if not path.exists():
        raise IOFailure(f"Content path not found: {path}")
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in MD_EXTENSIONS)


def relative_path(path: Path, root: Path) -> str:
    """Posix path of `path` relative to the content root (file name if root is the file)."""
    if root.is_file() or path == root:
        return path.name
    return path.relative_to(root).as_posix()


def parse_file(path: Path, root: Path) -> Document:
    """Read and parse a single markdown file.

    Raises IOFailure if the file cannot be read, MalformedDocument (with path set)
    if its content is not a valid document.
    """
    rel = relative_path(path, root)
    try:
        text = path.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise MalformedDocument(f"not valid UTF-8: {e}", rel) from e
    except OSError as e:
        raise IOFailure(f"Failed to read {path}: {e}") from e

    try:
        doc = parse_text(text, rel)
    except MalformedDocument as e:
        raise e.with_path(rel) from e
    logger.debug("parsed %s as '%s'", rel, doc.slug)
    return doc
