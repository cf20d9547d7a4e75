from conftest import headers_for
from stocktrack.core.permissions import Role
from stocktrack.models import Service


def test_services_require_session(client):
    r = client.get("/api/services")
    assert r.status_code == 401
    assert r.json()["detail"] == "Not authenticated"


def test_create_and_list_services(client, admin_headers):
    r = client.post("/api/services", json={"name": "Hair Care", "description": "Cuts", "service_charge": 12.5},
                    headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["created_by"] == "boss"

    listing = client.get("/api/services", headers=admin_headers).json()
    assert [s["name"] for s in listing] == ["Hair Care"]
    assert listing[0]["service_charge"] == 12.5


def test_service_name_conflict_is_case_insensitive(client, admin_headers):
    client.post("/api/services", json={"name": "Hair Care"}, headers=admin_headers)
    r = client.post("/api/services", json={"name": "hair care"}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "A service with this name already exists"


def test_service_name_conflict_folds_non_ascii_case(client, admin_headers):
    assert client.post("/api/services", json={"name": "Ünique Spa"}, headers=admin_headers).status_code == 200
    r = client.post("/api/services", json={"name": "ünique spa"}, headers=admin_headers)
    assert r.status_code == 400


def test_service_update_keeps_own_name(client, admin_headers):
    created = client.post("/api/services", json={"name": "Hair Care"}, headers=admin_headers).json()
    other = client.post("/api/services", json={"name": "Nails"}, headers=admin_headers).json()

    r = client.put(f"/api/services/{created['id']}", json={"name": "Hair Care", "description": "updated"},
                   headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["description"] == "updated"

    r = client.put(f"/api/services/{other['id']}", json={"name": "HAIR CARE"}, headers=admin_headers)
    assert r.status_code == 400


def test_delete_missing_service_is_404(client, admin_headers):
    r = client.delete("/api/services/00000000-0000-0000-0000-000000000000", headers=admin_headers)
    assert r.status_code == 404
    assert r.json()["detail"] == "Service not found"


def test_delete_service_with_products_is_blocked(client, admin_headers, catalog, db):
    service_id = catalog["service"].id
    r = client.delete(f"/api/services/{service_id}", headers=admin_headers)
    assert r.status_code == 400
    assert db.query(Service).count() == 1


def test_normal_admin_needs_service_permission(client, make_user):
    viewer = make_user("viewer@example.com", permissions={"service": ["view"]})
    creator = make_user("creator@example.com", permissions={"service": ["view", "create"]})

    r = client.post("/api/services", json={"name": "Spa"}, headers=headers_for(viewer))
    assert r.status_code == 401
    r = client.post("/api/services", json={"name": "Spa"}, headers=headers_for(creator))
    assert r.status_code == 200


def test_products_listing_includes_service_name_and_filters(client, admin_headers, catalog):
    service_id = str(catalog["service"].id)
    other = client.post("/api/services", json={"name": "Nails"}, headers=admin_headers).json()
    client.post("/api/products", json={"name": "Polish", "service_id": other["id"]}, headers=admin_headers)

    all_products = client.get("/api/products", headers=admin_headers).json()
    assert {p["name"] for p in all_products} == {"Shampoo", "Polish"}

    filtered = client.get(f"/api/products?service_id={service_id}", headers=admin_headers).json()
    assert [(p["name"], p["service_name"]) for p in filtered] == [("Shampoo", "Hair Care")]


def test_get_product_by_id(client, admin_headers, catalog):
    product_id = str(catalog["product"].id)
    r = client.get(f"/api/products/{product_id}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["service_name"] == "Hair Care"

    r = client.get("/api/products/00000000-0000-0000-0000-000000000000", headers=admin_headers)
    assert r.status_code == 404


def test_product_conflict_and_self_update(client, admin_headers, catalog):
    service_id = str(catalog["service"].id)
    product_id = str(catalog["product"].id)

    r = client.post("/api/products", json={"name": "SHAMPOO", "service_id": service_id}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "A product with this name already exists"

    r = client.put(f"/api/products/{product_id}", json={"name": "Shampoo", "description": "500ml"},
                   headers=admin_headers)
    assert r.status_code == 200


def test_product_requires_existing_service(client, admin_headers):
    r = client.post("/api/products", json={"name": "Ghost", "service_id": "00000000-0000-0000-0000-000000000000"},
                    headers=admin_headers)
    assert r.status_code == 404


def test_missing_required_field_is_400(client, admin_headers):
    r = client.post("/api/products", json={"name": "No service"}, headers=admin_headers)
    assert r.status_code == 400


def test_brand_mutations_are_super_admin_only(client, make_user, catalog):
    product_id = str(catalog["product"].id)
    normal = make_user("full@example.com", permissions={
        "service": ["view", "create", "edit", "delete"],
        "product": ["view", "create", "edit", "delete"],
    })

    r = client.post("/api/brands", json={"name": "Sunsilk", "product_id": product_id}, headers=headers_for(normal))
    assert r.status_code == 401

    r = client.get("/api/brands", headers=headers_for(normal))
    assert r.status_code == 200
    assert r.json()[0]["product_name"] == "Shampoo"


def test_brand_names_unique_per_product(client, admin_headers, catalog):
    product_id = str(catalog["product"].id)
    service_id = str(catalog["service"].id)

    r = client.post("/api/brands", json={"name": "dove", "product_id": product_id}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "A brand with this name already exists"

    other = client.post("/api/products", json={"name": "Soap", "service_id": service_id}, headers=admin_headers).json()
    r = client.post("/api/brands", json={"name": "Dove", "product_id": other["id"]}, headers=admin_headers)
    assert r.status_code == 200

    brand_id = str(catalog["brand"].id)
    r = client.put(f"/api/brands/{brand_id}", json={"name": "Dove"}, headers=admin_headers)
    assert r.status_code == 200


def test_delete_brand_with_stock_is_blocked(client, admin_headers, catalog, stock_in):
    stock_in(catalog["product"], catalog["brand"], 3)
    r = client.delete(f"/api/brands/{catalog['brand'].id}", headers=admin_headers)
    assert r.status_code == 400


def test_inactive_user_is_rejected(client, make_user):
    user = make_user("gone@example.com", role=Role.SUPER_ADMIN, is_active=False)
    r = client.get("/api/services", headers=headers_for(user))
    assert r.status_code == 401


def test_health_is_the_only_liveness_route(client):
    assert client.get("/health").status_code == 200
    assert client.get("/api/status").status_code == 404
