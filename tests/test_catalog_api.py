import pytest
from conftest import API


def category_payload(key="drinks", **overrides):
    payload = {"key": key, "name_i18n": {"vi": "Đồ uống", "en": "Drinks"}, "sortOrder": 1}
    payload.update(overrides)
    return payload


def product_payload(**overrides):
    payload = {
        "name_i18n": {"vi": "Trà sữa", "en": "Milk tea"},
        "description_i18n": {"vi": "Ngọt vừa", "en": ""},
        "sortOrder": 1,
        "variants": [
            {"label_i18n": {"vi": "Nhỏ", "en": "Small"}, "price": 30000, "isDefault": True},
            {"label_i18n": {"vi": "Lớn"}, "price": 45000, "note_i18n": {"en": "Extra ice"}},
        ],
        "tags": ["tea"],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def category(admin_client):
    r = admin_client.post(f"{API}/product-categories", json=category_payload())
    assert r.status_code == 201, r.text
    return r.json()


# ========= categories =========
def test_category_key_is_lowercased_and_unique(admin_client, category):
    assert category["key"] == "drinks"
    r = admin_client.post(f"{API}/product-categories", json=category_payload(key="DRINKS"))
    assert r.status_code == 400
    assert r.json()["detail"] == "key already exists"


def test_category_update_key_clash(admin_client, category):
    other = admin_client.post(f"{API}/product-categories", json=category_payload(key="mains")).json()
    r = admin_client.put(f"{API}/product-categories/{other['id']}", json={"key": "drinks"})
    assert r.status_code == 400
    # keeping its own key is fine
    r = admin_client.put(f"{API}/product-categories/{category['id']}", json={"key": "drinks", "sortOrder": 5})
    assert r.status_code == 200
    assert r.json()["sortOrder"] == 5


def test_category_requires_a_name(admin_client):
    r = admin_client.post(f"{API}/product-categories", json=category_payload(name_i18n={"vi": "", "en": ""}))
    assert r.status_code == 400


def test_category_list_is_public_and_localized(client, category):
    r = client.get(f"{API}/product-categories", params={"locale": "en"})
    assert r.status_code == 200
    assert r.json()["items"][0]["name"] == "Drinks"
    assert "Accept-Language" in r.headers["vary"]


def test_locale_query_overrides_accept_language(client, category):
    r = client.get(f"{API}/product-categories", params={"locale": "vi"}, headers={"Accept-Language": "en"})
    assert r.json()["items"][0]["name"] == "Đồ uống"
    assert "Accept-Language" in r.headers["vary"]

    r = client.get(f"{API}/product-categories", params={"locale": "en"}, headers={"Accept-Language": "vi"})
    assert r.json()["items"][0]["name"] == "Drinks"
    assert "Accept-Language" in r.headers["vary"]

    r = client.get(f"{API}/product-categories", headers={"Accept-Language": "en-US,en;q=0.9"})
    assert r.json()["items"][0]["name"] == "Drinks"


def test_category_writes_require_login(client):
    assert client.post(f"{API}/product-categories", json=category_payload()).status_code == 401


# ========= products =========
def test_product_slug_is_derived_and_deduplicated(admin_client):
    first = admin_client.post(f"{API}/products", json=product_payload()).json()
    second = admin_client.post(f"{API}/products", json=product_payload()).json()
    assert first["slug"] == "milk-tea"
    assert second["slug"] == "milk-tea-2"

    explicit = admin_client.post(f"{API}/products", json=product_payload(slug="Trà Xanh Lạnh")).json()
    assert explicit["slug"] == "tra-xanh-lanh"


def test_product_slug_update_skips_itself(admin_client):
    first = admin_client.post(f"{API}/products", json=product_payload()).json()
    r = admin_client.put(f"{API}/products/{first['id']}", json={"slug": "milk-tea"})
    assert r.json()["slug"] == "milk-tea"
    r = admin_client.put(f"{API}/products/{first['id']}", json={"isAvailable": False})
    assert r.json()["slug"] == "milk-tea"
    assert r.json()["isAvailable"] is False


def test_product_invalid_category(admin_client, category):
    r = admin_client.post(f"{API}/products", json=product_payload(categoryId=9999))
    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid categoryId"
    r = admin_client.post(f"{API}/products", json=product_payload(categoryId=category["id"]))
    assert r.status_code == 201


def test_product_validation(admin_client):
    assert admin_client.post(f"{API}/products", json=product_payload(variants=[])).status_code == 400
    assert admin_client.post(f"{API}/products", json=product_payload(spicinessLevel=4)).status_code == 400
    bad_price = product_payload(variants=[{"price": -1}])
    assert admin_client.post(f"{API}/products", json=bad_price).status_code == 400


def test_product_variants_are_localized(admin_client, client):
    created = admin_client.post(f"{API}/products", json=product_payload()).json()
    assert created["variants"][0]["currency"] == "VND"

    body = client.get(f"{API}/products/{created['id']}", params={"locale": "en"}).json()
    assert body["name"] == "Milk tea"
    assert body["description"] == "Ngọt vừa"
    small, large = body["variants"]
    assert (small["label"], small["isDefault"], small["price"]) == ("Small", True, 30000)
    # missing en label falls back to vi
    assert large["label"] == "Lớn"
    assert large["note"] == "Extra ice"
    assert small["note"] == ""


def test_product_list_filters(admin_client, client, category):
    admin_client.post(f"{API}/products", json=product_payload(categoryId=category["id"]))
    admin_client.post(
        f"{API}/products",
        json=product_payload(name_i18n={"vi": "Cà phê", "en": "Coffee"}, isAvailable=False, sortOrder=0),
    )

    everything = client.get(f"{API}/products").json()
    assert [p["slug"] for p in everything["items"]] == ["coffee", "milk-tea"]
    assert client.get(f"{API}/products", params={"categoryId": category["id"]}).json()["total"] == 1
    assert client.get(f"{API}/products", params={"isAvailable": "false"}).json()["total"] == 1
    assert client.get(f"{API}/products", params={"q": "coffee"}).json()["total"] == 1


def test_product_delete(admin_client, client):
    created = admin_client.post(f"{API}/products", json=product_payload()).json()
    assert admin_client.delete(f"{API}/products/{created['id']}").json() == {"message": "Deleted"}
    assert client.get(f"{API}/products/{created['id']}").status_code == 404


# ========= showcase collections =========
def image_payload(order_index, **overrides):
    payload = {
        "imageUrl": f"https://res.example.com/upload/{order_index}.jpg",
        "altText_i18n": {"vi": "Ảnh", "en": "Photo"},
        "orderIndex": order_index,
    }
    payload.update(overrides)
    return payload


@pytest.mark.parametrize("prefix", ["landing-menu", "marquee-images"])
def test_order_index_must_be_unique(admin_client, prefix):
    assert admin_client.post(f"{API}/{prefix}", json=image_payload(1)).status_code == 201
    r = admin_client.post(f"{API}/{prefix}", json=image_payload(1))
    assert r.status_code == 400
    assert "orderIndex" in r.json()["detail"]

    other = admin_client.post(f"{API}/{prefix}", json=image_payload(2)).json()
    assert admin_client.put(f"{API}/{prefix}/{other['id']}", json={"orderIndex": 1}).status_code == 400
    assert admin_client.put(f"{API}/{prefix}/{other['id']}", json={"orderIndex": 2}).status_code == 200


def test_only_one_pinned_marquee_image(admin_client):
    first = admin_client.post(f"{API}/marquee-images", json=image_payload(1, isPinned=True))
    assert first.status_code == 201
    r = admin_client.post(f"{API}/marquee-images", json=image_payload(2, isPinned=True))
    assert r.status_code == 400
    assert r.json()["detail"] == "There is already a pinned image"

    second = admin_client.post(f"{API}/marquee-images", json=image_payload(2)).json()
    assert second["isPinned"] is False
    assert admin_client.put(f"{API}/marquee-images/{second['id']}", json={"isPinned": True}).status_code == 400
    # re-pinning the pinned one is not a clash
    r = admin_client.put(f"{API}/marquee-images/{first.json()['id']}", json={"isPinned": True})
    assert r.status_code == 200


def test_public_list_hides_inactive(admin_client, client):
    admin_client.post(f"{API}/landing-menu", json=image_payload(2))
    admin_client.post(f"{API}/landing-menu", json=image_payload(1, isActive=False))

    public = client.get(f"{API}/landing-menu", params={"locale": "en"}).json()
    assert [i["orderIndex"] for i in public["items"]] == [2]
    assert public["items"][0]["altText"] == "Photo"

    everything = client.get(f"{API}/landing-menu", params={"includeInactive": "true"}).json()
    assert [i["orderIndex"] for i in everything["items"]] == [1, 2]

    inactive = admin_client.get(f"{API}/landing-menu/admin", params={"isActive": "false"}).json()
    assert [i["orderIndex"] for i in inactive["items"]] == [1]


def test_admin_list_requires_login(client):
    assert client.get(f"{API}/marquee-slides/admin").status_code == 401


def test_marquee_slides_crud(admin_client, client):
    r = admin_client.post(
        f"{API}/marquee-slides",
        json={
            "imageUrl": "https://res.example.com/upload/s.jpg",
            "orderIndex": 0,
            "tag_i18n": {"vi": "Mới"},
            "text_i18n": {"vi": "Món mới", "en": "New dish"},
        },
    )
    assert r.status_code == 201
    slide = r.json()

    body = client.get(f"{API}/marquee-slides/{slide['id']}", headers={"Accept-Language": "en"}).json()
    assert body["tag"] == "Mới"
    assert body["text"] == "New dish"

    assert admin_client.delete(f"{API}/marquee-slides/{slide['id']}").json() == {"message": "Deleted"}
    assert client.get(f"{API}/marquee-slides/{slide['id']}").status_code == 404


def test_showcase_validation(admin_client):
    assert admin_client.post(f"{API}/landing-menu", json=image_payload(-1)).status_code == 400
    assert admin_client.post(f"{API}/landing-menu", json=image_payload(1, imageUrl="")).status_code == 400
