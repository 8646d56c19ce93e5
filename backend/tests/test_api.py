from datetime import datetime

from sqlalchemy.exc import OperationalError

from newsdesk.api.deps import get_db
from newsdesk.models import AccountRole, NewsArticle, NewsStatus

PASSWORD = "Secret#123"


def assert_envelope(body, status_code):
    assert set(body) == {"message", "status_code", "data"}
    assert body["status_code"] == status_code


# Authentication

def test_login_returns_token(client, staff):
    response = client.post("/api/accounts/login", json={"email": staff.email, "password": PASSWORD})
    assert response.status_code == 200
    body = response.json()
    assert_envelope(body, 200)
    assert body["data"]["token_type"] == "bearer"
    assert body["data"]["role"] == "Staff"

    token = body["data"]["access_token"]
    profile = client.get("/api/accounts/profile", headers={"Authorization": f"Bearer {token}"})
    assert profile.status_code == 200
    assert profile.json()["data"]["email"] == staff.email


def test_login_with_wrong_password(client, staff):
    response = client.post("/api/accounts/login", json={"email": staff.email, "password": "nope"})
    assert response.status_code == 401
    assert_envelope(response.json(), 401)
    assert response.json()["data"] is None


def test_missing_and_invalid_token(client):
    response = client.get("/api/categories")
    assert response.status_code == 401
    assert_envelope(response.json(), 401)

    response = client.get("/api/categories", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_role_gates(client, make_account, auth_headers):
    lecturer = make_account(role=AccountRole.LECTURER)
    staff = make_account(role=AccountRole.STAFF)

    response = client.get("/api/accounts", headers=auth_headers(staff))
    assert response.status_code == 403
    assert_envelope(response.json(), 403)

    response = client.post("/api/tags", json={"name": "breaking"}, headers=auth_headers(lecturer))
    assert response.status_code == 403

    response = client.post("/api/tags", json={"name": "breaking"}, headers=auth_headers(staff))
    assert response.status_code == 201
    assert response.json()["status_code"] == 201


# Validation

def test_request_validation_uses_envelope(client, admin, auth_headers):
    response = client.post(
        "/api/accounts",
        json={"name": "X", "email": "not-an-email", "password": "123"},
        headers=auth_headers(admin),
    )
    assert response.status_code == 400
    body = response.json()
    assert_envelope(body, 400)
    fields = {error["field"] for error in body["data"]}
    assert {"email", "password"} <= fields


def test_invalid_role_filter_is_a_bad_request(client, admin, auth_headers):
    response = client.get("/api/accounts", params={"role": 7}, headers=auth_headers(admin))
    assert response.status_code == 400
    assert_envelope(response.json(), 400)


# Accounts

def test_account_management(client, admin, auth_headers):
    headers = auth_headers(admin)
    created = client.post(
        "/api/accounts",
        json={"name": "Lecturer", "email": "lect@example.com", "password": "secret1", "role": 3},
        headers=headers,
    )
    assert created.status_code == 201
    account_id = created.json()["data"]["id"]

    duplicate = client.post(
        "/api/accounts",
        json={"name": "Other", "email": "lect@example.com", "password": "secret1"},
        headers=headers,
    )
    assert duplicate.status_code == 409

    updated = client.put(f"/api/accounts/{account_id}", json={"email": "lect2@example.com"}, headers=headers)
    assert updated.status_code == 200
    assert updated.json()["data"]["name"] == "Lecturer"
    assert updated.json()["data"]["role"] == 3

    clash = client.put(f"/api/accounts/{account_id}", json={"email": admin.email}, headers=headers)
    assert clash.status_code == 409

    listed = client.get("/api/accounts", params={"role": 3}, headers=headers)
    assert [a["email"] for a in listed.json()["data"]["items"]] == ["lect2@example.com"]

    deleted = client.delete(f"/api/accounts/{account_id}", headers=headers)
    assert deleted.status_code == 200
    missing = client.get(f"/api/accounts/{account_id}", headers=headers)
    assert missing.status_code == 404
    assert_envelope(missing.json(), 404)


def test_profile_update_cannot_change_role(client, staff, auth_headers):
    response = client.put(
        "/api/accounts/profile",
        json={"name": "Renamed", "role": 1},
        headers=auth_headers(staff),
    )
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Renamed"
    assert response.json()["data"]["role"] == int(AccountRole.STAFF)


# Categories and tags

def test_category_dropdown_endpoint(client, staff, auth_headers, make_category):
    a = make_category("A")
    make_category("B", parent=a)
    make_category("C", parent=a, is_active=False)

    response = client.get("/api/categories/dropdown", headers=auth_headers(staff))
    assert response.status_code == 200
    assert response.json()["data"] == [
        {"id": a.id, "name": "A", "children": [{"id": a.id + 1, "name": "B", "children": []}]},
    ]


def test_category_delete_in_use_deactivates(client, staff, auth_headers, make_category, make_article):
    category = make_category("Used")
    make_article(staff, category)

    response = client.delete(f"/api/categories/{category.id}", headers=auth_headers(staff))
    assert response.status_code == 200

    detail = client.get(f"/api/categories/{category.id}", headers=auth_headers(staff))
    assert detail.json()["data"]["is_active"] is False


def test_category_paging_beyond_last_page(client, staff, auth_headers, make_category):
    for i in range(3):
        make_category(f"Category {i}")

    response = client.get(
        "/api/categories",
        params={"page_number": 9, "page_size": 2},
        headers=auth_headers(staff),
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["items"] == []
    assert data["total_count"] == 3
    assert data["total_pages"] == 2
    assert data["has_next_page"] is False


def test_page_size_is_clamped(client, staff, auth_headers, make_tag):
    make_tag("only")
    response = client.get("/api/tags", params={"page_size": 500}, headers=auth_headers(staff))
    assert response.json()["data"]["page_size"] == 50


def test_tag_in_use_cannot_be_deleted(client, staff, auth_headers, make_category, make_tag, make_article):
    tag = make_tag("used")
    make_article(staff, make_category("News"), tags=[tag])

    response = client.delete(f"/api/tags/{tag.id}", headers=auth_headers(staff))
    assert response.status_code == 409
    assert_envelope(response.json(), 409)


# News

def test_public_news_list_and_detail(client, staff, make_category, make_tag, make_article):
    tag = make_tag("politics")
    article = make_article(staff, make_category("News"), title="Bầu cử", tags=[tag])

    listed = client.get("/api/news", params={"title": "bau cu"})
    assert listed.status_code == 200
    items = listed.json()["data"]["items"]
    assert [i["id"] for i in items] == [article.id]
    assert items[0]["category_name"] == "News"
    assert items[0]["created_by_name"] == staff.name

    detail = client.get(f"/api/news/{article.id}")
    assert detail.status_code == 200
    assert detail.json()["data"]["tags"] == [{"id": tag.id, "name": "politics"}]

    assert client.get("/api/news/999").status_code == 404


def test_news_filter_by_tag_ids(client, staff, make_category, make_tag, make_article):
    category = make_category("News")
    t1, t2, t3 = make_tag("one"), make_tag("two"), make_tag("three")
    both = make_article(staff, category, tags=[t1, t2, t3])
    make_article(staff, category, tags=[t1])

    response = client.get("/api/news", params=[("tag_ids", t1.id), ("tag_ids", t2.id)])
    assert [i["id"] for i in response.json()["data"]["items"]] == [both.id]


def test_create_update_and_soft_delete_article(client, db, staff, auth_headers, make_category, make_tag):
    category = make_category("News")
    t1, t2 = make_tag("one"), make_tag("two")
    headers = auth_headers(staff)

    created = client.post(
        "/api/news",
        json={"title": "Headline", "content": "Body", "category_id": category.id, "tag_ids": [t1.id]},
        headers=headers,
    )
    assert created.status_code == 201
    news_id = created.json()["data"]["id"]

    updated = client.put(f"/api/news/{news_id}", json={"tag_ids": [t2.id]}, headers=headers)
    assert updated.status_code == 200
    data = updated.json()["data"]
    assert [t["id"] for t in data["tags"]] == [t2.id]
    assert data["updated_by"]["id"] == staff.id
    assert data["title"] == "Headline"

    deleted = client.delete(f"/api/news/{news_id}", headers=headers)
    assert deleted.status_code == 200
    stored = db.query(NewsArticle).filter(NewsArticle.id == news_id).one()
    assert stored.status == NewsStatus.INACTIVE


def test_blank_article_update_is_rejected(client, db, staff, auth_headers, make_category, make_article):
    article = make_article(staff, make_category("News"), title="Kept")

    response = client.put(f"/api/news/{article.id}", json={"title": "   ", "content": "   "}, headers=auth_headers(staff))
    assert response.status_code == 400
    assert {error["field"] for error in response.json()["data"]} == {"title", "content"}

    db.refresh(article)
    assert article.title == "Kept"


def test_create_article_with_unknown_category(client, staff, auth_headers):
    response = client.post(
        "/api/news",
        json={"title": "Headline", "content": "Body", "category_id": 42},
        headers=auth_headers(staff),
    )
    assert response.status_code == 404


def test_lecturer_cannot_create_article(client, make_account, auth_headers, make_category):
    lecturer = make_account(role=AccountRole.LECTURER)
    category = make_category("News")
    response = client.post(
        "/api/news",
        json={"title": "Headline", "content": "Body", "category_id": category.id},
        headers=auth_headers(lecturer),
    )
    assert response.status_code == 403


def test_other_staff_cannot_edit_article(client, staff, make_account, auth_headers, make_category, make_article):
    other = make_account(role=AccountRole.STAFF)
    article = make_article(staff, make_category("News"))

    response = client.put(f"/api/news/{article.id}", json={"title": "Mine now"}, headers=auth_headers(other))
    assert response.status_code == 403

    response = client.delete(f"/api/news/{article.id}", headers=auth_headers(other))
    assert response.status_code == 403


def test_my_news_is_owner_scoped(client, staff, make_account, auth_headers, make_category, make_article):
    other = make_account(role=AccountRole.STAFF)
    category = make_category("News")
    mine = make_article(staff, category)
    make_article(other, category)

    response = client.get("/api/news/mine", headers=auth_headers(staff))
    assert [i["id"] for i in response.json()["data"]["items"]] == [mine.id]


def test_statistics_report(client, admin, staff, auth_headers, make_category, make_article):
    category = make_category("News")
    make_article(staff, category, created_date=datetime(2024, 3, 1, 9, 0))
    make_article(staff, category, created_date=datetime(2024, 3, 2, 9, 0), status=NewsStatus.INACTIVE)

    response = client.get(
        "/api/news/statistics",
        params={"start_date": "2024-03-01", "end_date": "2024-03-02"},
        headers=auth_headers(admin),
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["total_articles_created"] == 2
    assert data["inactive_articles_count"] == 1
    assert [d["date"] for d in data["daily_breakdown"]] == ["2024-03-02", "2024-03-01"]

    rejected = client.get(
        "/api/news/statistics",
        params={"start_date": "2024-03-02", "end_date": "2024-03-01"},
        headers=auth_headers(admin),
    )
    assert rejected.status_code == 400

    forbidden = client.get(
        "/api/news/statistics",
        params={"start_date": "2024-03-01", "end_date": "2024-03-02"},
        headers=auth_headers(staff),
    )
    assert forbidden.status_code == 403


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "healthy"


class UnreachableDatabase:
    def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))


def test_health_reports_database_outage(client):
    from main import app

    app.dependency_overrides[get_db] = lambda: UnreachableDatabase()

    response = client.get("/api/health")

    assert response.status_code == 503
    body = response.json()
    assert_envelope(body, 503)
    assert body["data"]["status"] == "unhealthy"
    assert body["data"]["database"]["status"] == "error"
