"""API endpoint tests."""

from datetime import UTC, datetime, timedelta

from jose import jwt
from sqlalchemy.exc import OperationalError

from src.api.dependencies import get_catalog_service
from src.config import get_settings
from src.main import app


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


# --- Public catalog ---


def test_list_flavors_with_facets(client, sample_catalog):
    """Facets come from the whole catalog, items from the filtered list."""
    response = client.get("/api/v1/flavors", params={"sizes": ["60ml"]})
    assert response.status_code == 200
    data = response.json()

    assert data["total"] == 1
    assert data["items"][0]["flavor_name"] == "Mango Ice"
    assert data["items"][0]["display_size"] == "60ml"
    assert data["items"][0]["display_price"] == "$20"
    assert data["facets"]["sizes"] == ["100ml", "30ml", "60ml"]
    assert data["facets"]["max_price"] == 24.5


def test_list_flavors_sorted_by_price_for_salt_nic(client, sample_catalog):
    response = client.get("/api/v1/flavors", params={"sort": "price-asc", "category_type": "Salt Nic"})
    names = [item["flavor_name"] for item in response.json()["items"]]

    assert names == ["Berry Salt", "Vanilla Custard", "Mango Ice"]
    assert response.json()["items"][-1]["display_price"] == "N/A"


def test_list_flavors_price_range(client, sample_catalog):
    response = client.get("/api/v1/flavors", params={"min_price": 13, "max_price": 20})
    names = {item["flavor_name"] for item in response.json()["items"]}

    assert names == {"Mango Ice", "Vanilla Custard"}


def test_inverted_price_range(client):
    response = client.get("/api/v1/flavors", params={"min_price": 30, "max_price": 10})
    assert response.status_code == 422


def test_unknown_sort_rejected(client):
    response = client.get("/api/v1/flavors", params={"sort": "random"})
    assert response.status_code == 422


def test_category_page(client, sample_catalog):
    """Fruit on the E-Liquid page excludes Salt Nic only flavors."""
    response = client.get("/api/v1/types/e-liquid/categories/fruit")
    assert response.status_code == 200
    data = response.json()

    assert data["category_type"] == "E-Liquid"
    assert [item["flavor_name"] for item in data["items"]] == ["Mango Ice"]


def test_category_page_all_for_salt_nic(client, sample_catalog):
    response = client.get("/api/v1/types/Salt-Nic/categories/all", params={"sort": "name-desc"})
    data = response.json()

    assert [item["flavor_name"] for item in data["items"]] == ["Vanilla Custard", "Berry Salt"]
    assert data["items"][0]["display_size"] == "30ml"


def test_category_page_bad_type(client):
    response = client.get("/api/v1/types/vape-juice/categories/fruit")
    assert response.status_code == 400


def test_category_page_bad_category(client):
    response = client.get("/api/v1/types/e-liquid/categories/seafood")
    assert response.status_code == 400


def test_flavor_detail(client, sample_catalog):
    response = client.get(f"/api/v1/flavors/{sample_catalog['custard']}")
    assert response.status_code == 200
    data = response.json()

    assert data["type"] == "Both"
    assert len(data["e_liquid_variants"]) == 1
    assert data["salt_nic_variants"][0]["size"] == "30ml"
    assert data["image"] == "/placeholder.svg"


def test_flavor_not_found(client):
    response = client.get("/api/v1/flavors/does-not-exist")
    assert response.status_code == 404
    assert response.json()["detail"] == "Flavor not found"


def test_new_flavors(client, sample_catalog):
    response = client.get("/api/v1/flavors/new", params={"limit": 2})
    assert response.status_code == 200

    assert [item["flavor_name"] for item in response.json()] == ["Vanilla Custard", "Berry Salt"]


def test_search(client, sample_catalog):
    response = client.get("/api/v1/search", params={"q": "cloud"})
    assert [item["flavor_name"] for item in response.json()] == ["Berry Salt", "Mango Ice"]

    response = client.get("/api/v1/search", params={"q": "CUSTARD"})
    assert [item["flavor_name"] for item in response.json()] == ["Vanilla Custard"]


def test_search_blank_query(client, sample_catalog):
    response = client.get("/api/v1/search", params={"q": "  "})
    assert response.json() == []


def test_search_treats_wildcards_literally(client, sample_catalog):
    response = client.get("/api/v1/search", params={"q": "%"})
    assert response.json() == []


def test_categories_vocabulary(client):
    data = client.get("/api/v1/categories").json()

    assert data["categories"][0] == "Fruit"
    assert "Nuts" in data["categories"]
    assert data["nic_levels"]["Salt Nic"][-1] == 55


def test_manufacturers(client, sample_catalog):
    response = client.get("/api/v1/manufacturers")
    assert response.json() == ["Bakehouse", "Cloud Co"]


def test_settings_defaults(client):
    response = client.get("/api/v1/settings")
    assert response.status_code == 200
    assert response.json() == {"logo_url": None, "line_of_the_month": None}


def test_deals_disabled_without_line_of_the_month(client, sample_catalog):
    response = client.get("/api/v1/deals")
    assert response.json() == {"manufacturer": None, "items": []}


def test_deals_for_line_of_the_month(client, sample_catalog, admin_headers):
    response = client.put(
        "/api/v1/admin/line-of-the-month", headers=admin_headers, json={"manufacturer": "Cloud Co"}
    )
    assert response.status_code == 200

    data = client.get("/api/v1/deals").json()

    assert data["manufacturer"] == "Cloud Co"
    assert [item["flavor_name"] for item in data["items"]] == ["Berry Salt", "Mango Ice"]


def test_clearing_line_of_the_month(client, sample_catalog, admin_headers):
    client.put("/api/v1/admin/line-of-the-month", headers=admin_headers, json={"manufacturer": "Cloud Co"})
    client.put("/api/v1/admin/line-of-the-month", headers=admin_headers, json={"manufacturer": None})

    assert client.get("/api/v1/deals").json()["manufacturer"] is None


def test_store_error_returns_503(client):
    """Storage failures surface as an error state without retries."""

    class BrokenService:
        def get_all_flavors(self):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    app.dependency_overrides[get_catalog_service] = lambda: BrokenService()
    response = client.get("/api/v1/flavors")

    assert response.status_code == 503
    assert response.json()["detail"] == "Catalog store unavailable"


# --- Admin session ---


def test_admin_login_wrong_password(client):
    response = client.post("/api/v1/admin/login", json={"password": "wrong"})
    assert response.status_code == 401


def test_admin_session(client, admin_headers):
    response = client.get("/api/v1/admin/session", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["subject"] == "admin"


def test_admin_requires_token(client):
    response = client.get("/api/v1/admin/flavors")
    assert response.status_code == 401


def test_expired_admin_token_rejected(client):
    settings = get_settings()
    expired = jwt.encode(
        {"sub": "admin", "scope": "admin", "exp": datetime.now(UTC) - timedelta(minutes=1)},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )

    response = client.get("/api/v1/admin/flavors", headers={"Authorization": f"Bearer {expired}"})

    assert response.status_code == 401


def test_admin_logout(client, admin_headers):
    response = client.post("/api/v1/admin/logout", headers=admin_headers)
    assert response.status_code == 200


# --- Admin flavors ---


def test_create_flavor(client, admin_headers, flavor_form):
    response = client.post("/api/v1/admin/flavors", headers=admin_headers, json=flavor_form())
    assert response.status_code == 201
    data = response.json()

    assert data["id"]
    assert data["type"] == "E-Liquid"
    assert data["variants"][0]["size"] == "60ml"
    assert data["variants"][0]["price"] == 21.5

    detail = client.get(f"/api/v1/flavors/{data['id']}")
    assert detail.status_code == 200


def test_create_flavor_without_variants_writes_nothing(client, admin_headers, flavor_form):
    response = client.post("/api/v1/admin/flavors", headers=admin_headers, json=flavor_form(variants=[]))

    assert response.status_code == 422
    assert response.json()["detail"]["field"] == "variants"
    assert client.get("/api/v1/admin/flavors", headers=admin_headers).json() == []


def test_update_flavor_recomputes_type_and_keeps_date(client, admin_headers, sample_catalog, flavor_form):
    mango_id = sample_catalog["mango"]
    before = client.get(f"/api/v1/flavors/{mango_id}").json()

    response = client.put(
        f"/api/v1/admin/flavors/{mango_id}",
        headers=admin_headers,
        json=flavor_form(
            variants=[
                {"size": "60", "price": "19", "type": "E-Liquid", "nic_levels": [3]},
                {"size": "30ml", "price": "14", "type": "Salt Nic", "nic_levels": [35]},
            ]
        ),
    )

    assert response.status_code == 200
    data = response.json()
    assert data["type"] == "Both"
    assert data["flavor_name"] == "Strawberry Milk"
    assert data["date_added"] == before["date_added"]


def test_update_missing_flavor(client, admin_headers, flavor_form):
    response = client.put("/api/v1/admin/flavors/missing", headers=admin_headers, json=flavor_form())
    assert response.status_code == 404


def test_delete_flavor(client, admin_headers, sample_catalog):
    berry_id = sample_catalog["berry"]

    response = client.delete(f"/api/v1/admin/flavors/{berry_id}", headers=admin_headers)
    assert response.status_code == 204
    assert client.get(f"/api/v1/flavors/{berry_id}").status_code == 404

    response = client.delete(f"/api/v1/admin/flavors/{berry_id}", headers=admin_headers)
    assert response.status_code == 404


def test_dashboard_search(client, admin_headers, sample_catalog):
    response = client.get("/api/v1/admin/flavors", headers=admin_headers, params={"q": "bake"})
    assert [f["flavor_name"] for f in response.json()] == ["Vanilla Custard"]


def test_update_settings_upserts(client, admin_headers):
    response = client.put(
        "/api/v1/admin/settings", headers=admin_headers, json={"logo_url": "https://example.com/logo.png"}
    )
    assert response.status_code == 200

    response = client.put("/api/v1/admin/settings", headers=admin_headers, json={"line_of_the_month": "Bakehouse"})
    assert response.json() == {"logo_url": "https://example.com/logo.png", "line_of_the_month": "Bakehouse"}


def test_blank_line_of_the_month_in_settings_disables_deals(client, admin_headers, sample_catalog):
    response = client.put("/api/v1/admin/settings", headers=admin_headers, json={"line_of_the_month": "  "})

    assert response.json()["line_of_the_month"] is None
    assert client.get("/api/v1/deals").json() == {"manufacturer": None, "items": []}


def test_very_large_price_still_renders(client, admin_headers, flavor_form):
    variants = [{"size": "60", "price": "1e30", "type": "E-Liquid", "nic_levels": [3]}]
    client.post("/api/v1/admin/flavors", headers=admin_headers, json=flavor_form(variants=variants))

    response = client.get("/api/v1/flavors")

    assert response.status_code == 200
    assert response.json()["items"][0]["display_price"] == "$1" + "0" * 30
