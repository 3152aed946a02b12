# app/utils/blog_content.py
"""
Table of contents / plain text / word count for rich-text editor documents.

Editor JSON is first normalized into a canonical ``RichNode`` tree (children
may arrive under ``children`` or ``content`` depending on the editor
version), then summarized with a pre-order walk. Both passes are iterative,
so malformed or very deep input degrades the summary instead of raising.
"""
from __future__ import annotations

import json
import math
import re
from dataclasses import asdict, dataclass, field
from typing import Any, Mapping, Optional

from app.utils.slug import slugify

WORDS_PER_MINUTE = 200
MAX_RICH_DOC_BYTES = 2 * 1024 * 1024
HEADING_LEVELS = (2, 3)
FALLBACK_SLUG = "section"

_whitespace_re = re.compile(r"\s+")


@dataclass
class RichNode:
    type: Optional[str] = None
    text: Optional[str] = None
    level: Optional[int] = None
    tag: Optional[str] = None
    children: list["RichNode"] = field(default_factory=list)


@dataclass
class TocEntry:
    id: str
    text: str
    level: int


@dataclass
class ContentSummary:
    toc: list[TocEntry]
    plain_text: str
    word_count: int

    def toc_dicts(self) -> list[dict]:
        return [asdict(entry) for entry in self.toc]


def normalize_whitespace(text: str) -> str:
    return _whitespace_re.sub(" ", text).strip()


# ---------------- Normalization ----------------
def _as_level(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _raw_children(data: Mapping) -> list:
    children = data.get("children")
    if isinstance(children, list):
        return children
    content = data.get("content")
    if isinstance(content, list):
        return content
    return []


def _make_node(data: Mapping) -> RichNode:
    attrs = data.get("attrs")
    level = _as_level(attrs.get("level")) if isinstance(attrs, Mapping) else None
    if level is None:
        level = _as_level(data.get("level"))
    node_type = data.get("type")
    text = data.get("text")
    tag = data.get("tag")
    return RichNode(
        type=node_type if isinstance(node_type, str) else None,
        text=text if isinstance(text, str) else None,
        level=level,
        tag=tag.lower() if isinstance(tag, str) else None,
    )


def normalize_tree(document: Any) -> Optional[RichNode]:
    """Coerce editor JSON (or its ``root`` sub-object) into a RichNode tree."""
    if not isinstance(document, Mapping):
        return None
    raw = document.get("root")
    if not isinstance(raw, Mapping):
        raw = document

    root = _make_node(raw)
    stack = [(raw, root)]
    while stack:
        data, node = stack.pop()
        for child in _raw_children(data):
            if isinstance(child, Mapping):
                child_node = _make_node(child)
                node.children.append(child_node)
                stack.append((child, child_node))
    return root


# ---------------- Summary ----------------
def heading_level(node: RichNode) -> Optional[int]:
    if node.type not in (None, "heading"):
        return None
    if node.level in HEADING_LEVELS:
        return node.level
    if node.tag == "h2":
        return 2
    if node.tag == "h3":
        return 3
    return None


def _iter_preorder(node: RichNode):
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def node_text(node: RichNode) -> str:
    return " ".join(n.text for n in _iter_preorder(node) if n.text)


def summarize_tree(root: Optional[RichNode]) -> ContentSummary:
    toc: list[TocEntry] = []
    parts: list[str] = []
    slug_counts: dict[str, int] = {}

    if root is not None:
        for node in _iter_preorder(root):
            if node.text is not None:
                parts.append(node.text)

            level = heading_level(node)
            if level is None:
                continue
            text = normalize_whitespace(node_text(node))
            # punctuation-only headings carry no anchor text
            if not any(ch.isalnum() for ch in text):
                continue
            base = slugify(text) or FALLBACK_SLUG
            count = slug_counts.get(base, 0) + 1
            slug_counts[base] = count
            anchor = base if count == 1 else f"{base}-{count}"
            toc.append(TocEntry(id=anchor, text=text, level=level))

    plain_text = normalize_whitespace(" ".join(parts))
    word_count = len(plain_text.split()) if plain_text else 0
    return ContentSummary(toc=toc, plain_text=plain_text, word_count=word_count)


def summarize(document: Any) -> ContentSummary:
    return summarize_tree(normalize_tree(document))


def reading_time_minutes(word_count: int) -> int:
    if word_count <= 0:
        return 0
    return math.ceil(word_count / WORDS_PER_MINUTE)


def build_derived_fields(content_i18n: Optional[Mapping[str, Any]]) -> dict:
    content_i18n = content_i18n or {}
    vi = summarize(content_i18n.get("vi"))
    en = summarize(content_i18n.get("en"))
    return {
        "toc_i18n": {"vi": vi.toc_dicts(), "en": en.toc_dicts()},
        "plain_text_i18n": {"vi": vi.plain_text, "en": en.plain_text},
        "reading_time_minutes": reading_time_minutes(max(vi.word_count, en.word_count)),
    }


def content_size(document: Any) -> int:
    """UTF-8 byte size of the compact JSON encoding."""
    return len(json.dumps(document, ensure_ascii=False, separators=(",", ":")).encode("utf-8"))


class ContentTooLargeError(ValueError):
    def __init__(self, locale: str, size: int):
        self.locale = locale
        self.size = size
        super().__init__(f"content_i18n.{locale} exceeds {MAX_RICH_DOC_BYTES} bytes")


def check_content_size(content_i18n: Optional[Mapping[str, Any]]) -> None:
    for loc, document in (content_i18n or {}).items():
        if document is None:
            continue
        size = content_size(document)
        if size > MAX_RICH_DOC_BYTES:
            raise ContentTooLargeError(loc, size)
