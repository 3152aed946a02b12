import datetime as dt

import pytest
from conftest import API

from app.repositories import BlogRepository
from app.utils.blog_content import MAX_RICH_DOC_BYTES


def rich(*paragraphs, headings=()):
    nodes = [
        {"type": "heading", "attrs": {"level": 2}, "content": [{"type": "text", "text": h}]} for h in headings
    ]
    nodes += [{"type": "paragraph", "content": [{"type": "text", "text": p}]} for p in paragraphs]
    return {"type": "doc", "content": nodes}


def blog_payload(**overrides):
    payload = {
        "slug_i18n": {"vi": "Món mới", "en": "New dish"},
        "title_i18n": {"vi": "Món mới", "en": "New dish"},
        "excerpt_i18n": {"vi": "Tóm tắt", "en": ""},
        "content_i18n": {
            "vi": rich("Xin chào thế giới", headings=("Giới thiệu",)),
            "en": rich("Hello world", headings=("Intro", "Intro")),
        },
        "tags": ["food", " food ", "news", ""],
        "coverImage": {"url": "https://res.example.com/upload/c.jpg", "alt_i18n": {"vi": "ảnh"}},
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def create_blog(admin_client):
    def _create(**overrides):
        r = admin_client.post(f"{API}/blogs", json=blog_payload(**overrides))
        assert r.status_code == 201, r.text
        return r.json()

    return _create


# ========= admin =========
def test_admin_routes_require_login(client):
    assert client.get(f"{API}/blogs").status_code == 401
    assert client.post(f"{API}/blogs", json=blog_payload()).status_code == 401


def test_create_derives_fields(create_blog, admin):
    blog = create_blog()
    assert blog["slug"] == "mon-moi"
    assert blog["slug_i18n"] == {"vi": "mon-moi", "en": "new-dish"}
    assert blog["status"] == "draft"
    assert blog["publishedAt"] is None
    assert blog["tags"] == ["food", "news"]
    assert blog["readingTimeMinutes"] == 1
    assert blog["toc_i18n"]["en"] == [
        {"id": "intro", "text": "Intro", "level": 2},
        {"id": "intro-2", "text": "Intro", "level": 2},
    ]
    assert blog["plainText_i18n"]["vi"] == "Giới thiệu Xin chào thế giới"
    assert blog["coverImage"]["url"].endswith("/c.jpg")
    assert blog["stats"] == {"viewCount": 0}
    assert blog["createdBy"] == admin.id
    assert blog["robots"] == {"index": True, "follow": True}
    # no locale asked: maps stay raw
    assert "title" not in blog
    assert blog["metaTitle"] == "Món mới"


def test_admin_get_localizes_only_on_request(admin_client, create_blog):
    blog = create_blog()
    raw = admin_client.get(f"{API}/blogs/{blog['id']}").json()
    assert "title" not in raw
    localized = admin_client.get(f"{API}/blogs/{blog['id']}", params={"locale": "en"}).json()
    assert localized["title"] == "New dish"
    # empty en excerpt falls back to vi
    assert localized["excerpt"] == "Tóm tắt"


def test_create_validation_errors(admin_client):
    r = admin_client.post(f"{API}/blogs", json=blog_payload(title_i18n={"vi": " ", "en": ""}))
    assert r.status_code == 400
    assert "title" in r.json()["detail"]
    payload = blog_payload()
    del payload["content_i18n"]
    assert admin_client.post(f"{API}/blogs", json=payload).status_code == 400


def test_duplicate_slug_is_409(admin_client, create_blog):
    create_blog()
    r = admin_client.post(f"{API}/blogs", json=blog_payload())
    assert r.status_code == 409
    assert r.json()["detail"] == "Slug already exists"


def test_oversized_content_is_413(admin_client):
    big = {"type": "doc", "content": [{"type": "text", "text": "x" * MAX_RICH_DOC_BYTES}]}
    r = admin_client.post(
        f"{API}/blogs", json=blog_payload(content_i18n={"vi": rich("a"), "en": big})
    )
    assert r.status_code == 413


def test_schedule_requires_date(admin_client, create_blog):
    blog = create_blog()
    r = admin_client.patch(f"{API}/blogs/{blog['id']}/schedule", json={})
    assert r.status_code == 400

    r = admin_client.post(f"{API}/blogs", json=blog_payload(status="scheduled", slug_i18n={"vi": "a", "en": "b"}))
    assert r.status_code == 400


def test_schedule_then_publish_clears_schedule(admin_client, create_blog):
    blog = create_blog()
    when = (dt.datetime.now(dt.timezone.utc) + dt.timedelta(days=3)).replace(microsecond=0)
    r = admin_client.patch(f"{API}/blogs/{blog['id']}/schedule", json={"scheduledAt": when.isoformat()})
    assert r.status_code == 200
    assert r.json()["status"] == "scheduled"
    assert r.json()["scheduledAt"] == when.isoformat().replace("+00:00", "Z")

    r = admin_client.patch(f"{API}/blogs/{blog['id']}/publish")
    body = r.json()
    assert body["status"] == "published"
    assert body["scheduledAt"] is None
    assert body["publishedAt"] is not None


def test_archive_keeps_published_at(admin_client, create_blog):
    blog = create_blog(status="published")
    published_at = blog["publishedAt"]
    body = admin_client.patch(f"{API}/blogs/{blog['id']}/archive").json()
    assert body["status"] == "archived"
    assert body["publishedAt"] == published_at


def test_patch_merges_content_per_locale(admin_client, create_blog):
    blog = create_blog()
    r = admin_client.patch(
        f"{API}/blogs/{blog['id']}",
        json={"content_i18n": {"en": rich(" ".join(["word"] * 250))}, "excerpt_i18n": None},
    )
    body = r.json()
    assert r.status_code == 200
    assert body["plainText_i18n"]["vi"] == "Giới thiệu Xin chào thế giới"
    assert body["toc_i18n"]["en"] == []
    assert body["readingTimeMinutes"] == 2
    assert body["excerpt_i18n"] is None
    # untouched fields survive
    assert body["title_i18n"] == {"vi": "Món mới", "en": "New dish"}


def test_list_filters_and_strips_heavy_fields(admin_client, create_blog):
    create_blog()
    create_blog(slug_i18n={"vi": "bai-hai", "en": "post-two"}, status="published", tags=["events"])

    r = admin_client.get(f"{API}/blogs", params={"status": "published"})
    body = r.json()
    assert body["total"] == 1
    item = body["items"][0]
    assert item["slug"] == "bai-hai"
    assert "content_i18n" not in item
    assert "toc_i18n" not in item

    assert admin_client.get(f"{API}/blogs", params={"status": "all"}).json()["total"] == 2
    assert admin_client.get(f"{API}/blogs", params={"tag": "events"}).json()["total"] == 1
    assert admin_client.get(f"{API}/blogs", params={"q": "thế giới"}).json()["total"] == 2
    assert admin_client.get(f"{API}/blogs", params={"status": "bogus"}).status_code == 400


def test_search_and_tag_filters_treat_input_literally(admin_client, create_blog):
    create_blog(tags=['say "hi"', "a_b"])
    create_blog(slug_i18n={"vi": "bai-hai", "en": "post-two"}, tags=["axb"])

    def total(**params):
        return admin_client.get(f"{API}/blogs", params={"status": "all", **params}).json()["total"]

    assert total(tag='say "hi"') == 1
    assert total(tag="a_b") == 1
    assert total(tag="a%") == 0
    assert total(q="%") == 0
    assert total(q="_") == 0


def test_soft_delete_hides_blog(admin_client, create_blog, db):
    blog = create_blog(status="published")
    r = admin_client.delete(f"{API}/blogs/{blog['id']}")
    assert r.json() == {"message": "Deleted successfully"}
    assert admin_client.get(f"{API}/blogs/{blog['id']}").status_code == 404
    assert admin_client.get(f"{API}/public/blogs/mon-moi").status_code == 404
    # row is kept
    assert BlogRepository(db).query().count() == 1


# ========= public =========
def test_public_list_only_published(client, create_blog):
    create_blog()
    create_blog(slug_i18n={"vi": "da-dang", "en": "live"}, status="published")

    r = client.get(f"{API}/public/blogs", headers={"Accept-Language": "en-US,en;q=0.9"})
    assert r.status_code == 200
    assert "Accept-Language" in r.headers["vary"]
    body = r.json()
    assert body["total"] == 1
    item = body["items"][0]
    assert item["title"] == "New dish"
    assert "content" not in item
    assert "createdBy" not in item


def test_public_get_by_locale_slug(client, create_blog):
    create_blog(status="published")

    en = client.get(f"{API}/public/blogs/new-dish", params={"locale": "en"})
    assert en.status_code == 200
    body = en.json()
    assert body["title"] == "New dish"
    assert body["slug"] == "mon-moi"
    assert body["toc"][1]["id"] == "intro-2"
    assert body["plainText"] == "Intro Intro Hello world"
    assert body["content"]["type"] == "doc"
    assert "content_i18n" not in body
    assert body["metaTitle"] == "New dish"
    assert body["metaDescription"] == "Tóm tắt"
    assert body["ogImage"] == "https://res.example.com/upload/c.jpg"

    vi = client.get(f"{API}/public/blogs/mon-moi").json()
    assert vi["title"] == "Món mới"
    assert vi["toc"] == [{"id": "gioi-thieu", "text": "Giới thiệu", "level": 2}]

    # locale slug only matches its own locale; canonical slug matches always
    assert client.get(f"{API}/public/blogs/new-dish", params={"locale": "vi"}).status_code == 404
    assert client.get(f"{API}/public/blogs/mon-moi", params={"locale": "en"}).status_code == 200


def test_public_hides_drafts_and_future_posts(client, create_blog):
    create_blog()
    future = (dt.datetime.now(dt.timezone.utc) + dt.timedelta(days=1)).isoformat()
    create_blog(slug_i18n={"vi": "sap-toi", "en": "soon"}, status="published", publishedAt=future)
    assert client.get(f"{API}/public/blogs/mon-moi").status_code == 404
    assert client.get(f"{API}/public/blogs/sap-toi").status_code == 404


def test_view_count(client, create_blog):
    blog = create_blog(status="published")
    assert client.post(f"{API}/public/blogs/{blog['id']}/view").json() == {"viewCount": 1}
    assert client.post(f"{API}/public/blogs/{blog['id']}/view").json() == {"viewCount": 2}
    assert client.post(f"{API}/public/blogs/9999/view").status_code == 404

    draft = create_blog(slug_i18n={"vi": "nhap", "en": "draft"})
    assert client.post(f"{API}/public/blogs/{draft['id']}/view").status_code == 404


def test_publish_scheduled_promotes_due_posts(create_blog, db):
    past = (dt.datetime.now(dt.timezone.utc) - dt.timedelta(minutes=5)).isoformat()
    future = (dt.datetime.now(dt.timezone.utc) + dt.timedelta(days=1)).isoformat()
    create_blog(scheduledAt=past)
    create_blog(slug_i18n={"vi": "sau", "en": "later"}, scheduledAt=future)

    repo = BlogRepository(db)
    assert repo.publish_scheduled() == 1
    db.expire_all()
    statuses = sorted(b.status for b in repo.query())
    assert statuses == ["published", "scheduled"]
