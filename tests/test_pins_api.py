import math

from sqlalchemy.exc import OperationalError

from conftest import png_data_url
from pinboard.models import Follow, Like, Pin, Save


def _ids(resp):
    return [p["id"] for p in resp.get_json()["pins"]]


# ---------- listing ----------
def test_list_pins_newest_first_with_default_limit(client, make_user, make_pin):
    owner = make_user()
    ids = [make_pin(owner) for _ in range(3)]

    resp = client.get("/api/pins")
    assert resp.status_code == 200
    body = resp.get_json()
    assert _ids(resp) == list(reversed(ids))
    assert body["pagination"] == {"total": 3, "page": 1, "limit": 50, "totalPages": 1}


def test_pagination_covers_every_pin_exactly_once(client, make_user, make_pin):
    owner = make_user()
    ids = [make_pin(owner) for _ in range(120)]

    seen = []
    first = client.get("/api/pins?limit=50&page=1").get_json()
    assert first["pagination"]["totalPages"] == math.ceil(120 / 50) == 3
    for page in range(1, 4):
        resp = client.get(f"/api/pins?limit=50&page={page}")
        seen.extend(_ids(resp))

    assert len(seen) == len(set(seen)) == 120
    assert seen == sorted(ids, reverse=True)
    assert client.get("/api/pins?limit=50&page=4").get_json()["pins"] == []


def test_limit_and_page_are_clamped(client, make_user, make_pin):
    owner = make_user()
    make_pin(owner)
    body = client.get("/api/pins?limit=0&page=-3").get_json()
    assert body["pagination"]["limit"] == 1
    assert body["pagination"]["page"] == 1
    body = client.get("/api/pins?limit=5000&page=abc").get_json()
    assert body["pagination"]["limit"] == 100
    assert body["pagination"]["page"] == 1


def test_page_past_sql_offset_range_is_empty(client, make_user, make_pin):
    make_pin(make_user())
    resp = client.get("/api/pins?page=99999999999999999999&limit=100")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["pins"] == []
    assert body["pagination"]["total"] == 1
    assert body["pagination"]["page"] == (2 ** 63 - 1) // 100


def test_text_query_matches_title_or_description_case_insensitively(client, make_user, make_pin):
    owner = make_user()
    a = make_pin(owner, title="Mountain CABIN")
    b = make_pin(owner, title="Other", description="a cozy cabin in winter")
    make_pin(owner, title="Beach house")

    assert sorted(_ids(client.get("/api/pins?q=cabin"))) == sorted([a, b])


def test_tag_filter_is_exact_membership(client, make_user, make_pin):
    owner = make_user()
    nature = make_pin(owner, tags=["nature", "sunset"])
    make_pin(owner, tags=["naturecore"])
    make_pin(owner)

    assert _ids(client.get("/api/pins?tag=nature")) == [nature]
    assert _ids(client.get("/api/pins?tag=nat")) == []


def test_filters_are_combined_with_and(client, make_user, make_pin):
    a, b = make_user(), make_user()
    hit = make_pin(a, title="red bike", tags=["bikes"])
    make_pin(a, title="red car", tags=["cars"])
    make_pin(b, title="red bike too", tags=["bikes"])

    resp = client.get(f"/api/pins?q=red&tag=bikes&userId={a}")
    assert _ids(resp) == [hit]
    assert resp.get_json()["pagination"]["total"] == 1


def test_private_owner_pins_hidden_public_owner_pins_listed(client, client_as, make_user, make_pin):
    a = make_user(visibility="public", email="a@example.com")
    b = make_user(visibility="private", email="b@example.com")
    a_pins = [make_pin(a) for _ in range(3)]
    for _ in range(2):
        make_pin(b)
    stranger = make_user()

    for c in (client, client_as(stranger)):
        resp = c.get(f"/api/pins?userId={b}")
        assert resp.status_code == 200
        assert resp.get_json()["pins"] == []
        assert resp.get_json()["pagination"]["total"] == 0
        assert c.get("/api/pins?userId=b@example.com").get_json()["pins"] == []
        assert sorted(_ids(c.get(f"/api/pins?userId={a}"))) == sorted(a_pins)
        assert sorted(_ids(c.get("/api/pins?userId=a@example.com"))) == sorted(a_pins)


def test_private_owner_pins_visible_to_follower_and_owner(client_as, make_user, make_pin, add_edge):
    owner = make_user(visibility="private")
    pins = [make_pin(owner) for _ in range(2)]
    follower = make_user()
    add_edge(Follow, follower, owner)

    assert sorted(_ids(client_as(follower).get(f"/api/pins?userId={owner}"))) == sorted(pins)
    assert sorted(_ids(client_as(owner).get(f"/api/pins?userId={owner}"))) == sorted(pins)


def test_unknown_owner_returns_empty_page_not_404(client):
    for ref in ("424242", "ghost@example.com", "nonsense"):
        resp = client.get(f"/api/pins?userId={ref}")
        assert resp.status_code == 200
        assert resp.get_json()["pins"] == []


def test_favorites_lists_saved_pins_not_created_ones(client, make_user, make_pin, add_edge):
    creator = make_user()
    x = make_user()
    saved = [make_pin(creator), make_pin(creator)]
    make_pin(creator)
    make_pin(x)  # created by x, not saved
    for pid in saved:
        add_edge(Save, x, pid)

    assert sorted(_ids(client.get(f"/api/pins?userId={x}&favorites=true"))) == sorted(saved)


def test_viewer_flags_and_counts(client, client_as, make_user, make_pin, add_edge):
    owner, viewer, other = make_user(), make_user(), make_user()
    liked = make_pin(owner)
    plain = make_pin(owner)
    add_edge(Like, viewer, liked)
    add_edge(Like, other, liked)
    add_edge(Save, viewer, liked)

    pins = {p["id"]: p for p in client_as(viewer).get("/api/pins").get_json()["pins"]}
    assert pins[liked]["isLiked"] is True
    assert pins[liked]["isSaved"] is True
    assert pins[liked]["_count"] == {"likes": 2, "saves": 1}
    assert pins[plain]["isLiked"] is False
    assert pins[plain]["isSaved"] is False
    assert "likes" not in pins[liked]
    assert "saves" not in pins[liked]

    anon = {p["id"]: p for p in client.get("/api/pins").get_json()["pins"]}
    assert anon[liked]["isLiked"] is False
    assert anon[liked]["isSaved"] is False
    assert anon[liked]["_count"]["likes"] == 2


def test_store_failure_is_a_generic_500(client, monkeypatch):
    from pinboard.pins.routes import route_list_pins

    def boom(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(route_list_pins, "paginate_pins", boom)
    resp = client.get("/api/pins")
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Internal server error"}


# ---------- single pin ----------
def test_get_pin(client, client_as, make_user, make_pin, add_edge):
    owner, viewer = make_user(name="Owner"), make_user()
    pid = make_pin(owner, title="Lamp", tags=["home"])
    add_edge(Like, viewer, pid)

    body = client_as(viewer).get(f"/api/pins/{pid}").get_json()
    assert body["title"] == "Lamp"
    assert body["tags"] == ["home"]
    assert body["creator"]["name"] == "Owner"
    assert body["isLiked"] is True
    assert body["isSaved"] is False
    assert body["_count"] == {"likes": 1, "saves": 0}
    assert body["createdAt"].endswith("Z")


def test_get_missing_pin_is_404(client):
    resp = client.get("/api/pins/999")
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Pin not found"


# ---------- create ----------
def test_create_pin(client_as, make_user, count_rows):
    uid = make_user()
    resp = client_as(uid).post("/api/pins", json={
        "title": "  Desk setup ",
        "description": "walnut",
        "imageUrl": "https://img.example.com/desk.jpg",
        "tags": ["home", "home", " office ", ""],
    })
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["title"] == "Desk setup"
    assert body["tags"] == ["home", "office"]
    assert body["creatorId"] == uid
    assert count_rows(Pin, creator_id=uid) == 1


def test_create_pin_stores_inline_image(app, client_as, make_user):
    uid = make_user()
    resp = client_as(uid).post("/api/pins", json={"title": "Inline", "imageUrl": png_data_url()})
    assert resp.status_code == 201
    url = resp.get_json()["imageUrl"]
    assert url.startswith("/u/pins/")
    assert client_as(uid).get(url).status_code == 200


def test_create_pin_requires_login(client):
    resp = client.post("/api/pins", json={"title": "x", "imageUrl": "https://x"})
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "Unauthorized"


def test_create_pin_validation(client_as, make_user):
    resp = client_as(make_user()).post("/api/pins", json={"tags": "nope"})
    assert resp.status_code == 400
    errors = resp.get_json()["errors"]
    assert set(errors) == {"title", "imageUrl", "tags"}


def test_create_pin_rejects_non_string_fields(client_as, make_user, count_rows):
    uid = make_user()
    resp = client_as(uid).post("/api/pins", json={
        "title": 123,
        "imageUrl": "https://img.example.com/x.jpg",
        "link": ["https://a", "https://b"],
    })
    assert resp.status_code == 400
    assert resp.get_json()["errors"] == {"title": "Must be a string", "link": "Must be a string"}
    assert count_rows(Pin, creator_id=uid) == 0


def test_create_pin_rejects_array_body(client_as, make_user):
    resp = client_as(make_user()).post("/api/pins", json=[1, 2])
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Request body must be a JSON object"
