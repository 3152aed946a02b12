import pytest

from app.i18n import (
    DEFAULT_LOCALE,
    locale_priority,
    localize_doc,
    localize_list,
    normalize_locale,
    pick_localized,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, "vi"),
        ("", "vi"),
        ("   ", "vi"),
        ("en", "en"),
        ("en-US", "en"),
        ("EN-gb,en;q=0.9", "en"),
        ("VI", "vi"),
        ("vi-VN", "vi"),
        ("fr", "vi"),
        ("de-DE,en;q=0.8", "vi"),
    ],
)
def test_normalize_locale(raw, expected):
    assert normalize_locale(raw) == expected


@pytest.mark.parametrize("raw", ["en-US", "vi", "fr", "", "EN"])
def test_normalize_locale_is_idempotent(raw):
    once = normalize_locale(raw)
    assert normalize_locale(once) == once
    assert once in ("vi", "en")


def test_locale_priority_dedupes_in_order():
    assert locale_priority("en") == ["en", "vi"]
    assert locale_priority("vi") == ["vi", "en"]
    assert locale_priority(None) == ["en", DEFAULT_LOCALE]
    assert locale_priority("  ") == ["en", "vi"]


def test_pick_localized():
    assert pick_localized("plain", ["en"]) == "plain"
    assert pick_localized({"vi": "Xin chào", "en": "  "}, ["en", "vi"]) == "Xin chào"
    assert pick_localized({"vi": "", "en": ""}, ["en", "vi"]) is None
    assert pick_localized(None, ["vi"]) is None
    assert pick_localized(42, ["vi"]) is None


def test_localize_doc_fallback_order():
    doc = {
        "name_i18n": {"vi": "Trà sữa", "en": "Milk tea"},
        "description_i18n": {"vi": "Ngọt", "en": ""},
        "note": "bare value",
        "note_i18n": {"vi": "", "en": ""},
    }
    out = localize_doc(doc, "en", ["name", "description", "note", "missing"])
    assert out["name"] == "Milk tea"
    # empty en falls back to the default locale
    assert out["description"] == "Ngọt"
    assert out["note"] == "bare value"
    assert out["missing"] == ""
    # maps are passed through
    assert out["name_i18n"] == {"vi": "Trà sữa", "en": "Milk tea"}


def test_localize_doc_does_not_mutate_input():
    doc = {"title_i18n": {"vi": "A", "en": "B"}}
    localize_doc(doc, "en", ["title"])
    assert "title" not in doc


def test_localize_doc_slug_collapse_only_when_requested():
    doc = {"slug": "canonical", "slug_i18n": {"vi": "bai-viet", "en": "post"}}
    assert localize_doc(doc, "en", [])["slug"] == "canonical"
    assert localize_doc(doc, "en", [], include_slug_i18n=True)["slug"] == "post"
    assert localize_doc({"slug": "x", "slug_i18n": {"vi": "", "en": ""}}, "en", [], True)["slug"] == "x"


def test_localize_list_preserves_order():
    docs = [{"tag_i18n": {"vi": str(i), "en": f"e{i}"}} for i in range(5)]
    out = localize_list(docs, "en", ["tag"])
    assert [d["tag"] for d in out] == ["e0", "e1", "e2", "e3", "e4"]
