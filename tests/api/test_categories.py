"""API tests for /api/categories."""


def test_default_categories_are_seeded(client):
    response = client.get("/api/categories")

    assert response.status_code == 200
    names = {c["name"] for c in response.json()}
    assert names == {"Technical Support", "Academic", "Administrative", "General"}


def test_create_category(client):
    response = client.post(
        "/api/categories",
        json={"name": "Library", "color": "#00AA99", "description": "Books and loans"}
    )

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Library"
    assert body["color"] == "#00AA99"
    assert body["id"]

    fetched = client.get(f"/api/categories/{body['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["description"] == "Books and loans"


def test_create_category_uses_default_color(client):
    response = client.post("/api/categories", json={"name": "Housing"})

    assert response.status_code == 201
    assert response.json()["color"] == "#1976D2"


def test_invalid_color_is_rejected(client):
    response = client.post("/api/categories", json={"name": "Bad", "color": "blue"})

    assert response.status_code == 422


def test_partial_update_keeps_other_fields(client, categories_by_name):
    academic = categories_by_name["Academic"]

    response = client.put(f"/api/categories/{academic['id']}", json={"color": "#123456"})

    assert response.status_code == 200
    body = response.json()
    assert body["color"] == "#123456"
    assert body["name"] == "Academic"
    assert body["description"] == academic["description"]


def test_delete_category(client, categories_by_name, templates_by_title):
    academic = categories_by_name["Academic"]

    response = client.delete(f"/api/categories/{academic['id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "Category deleted successfully"}
    assert client.get(f"/api/categories/{academic['id']}").status_code == 404

    grade = client.get(f"/api/response-templates/{templates_by_title['Grade Inquiry Response']['id']}")
    assert grade.status_code == 200
    assert grade.json()["category_id"] is None


def test_unknown_category_is_404(client):
    assert client.get("/api/categories/missing").status_code == 404
    assert client.put("/api/categories/missing", json={"name": "x"}).status_code == 404
    assert client.delete("/api/categories/missing").status_code == 404


def test_get_category(client, categories_by_name):
    general = categories_by_name["General"]

    response = client.get(f"/api/categories/{general['id']}")

    assert response.status_code == 200
    assert response.json() == general


def test_required_fields_cannot_be_cleared(client, categories_by_name):
    academic = categories_by_name["Academic"]

    assert client.put(f"/api/categories/{academic['id']}", json={"name": None}).status_code == 422
    assert client.put(f"/api/categories/{academic['id']}", json={"color": None}).status_code == 422
    assert client.get(f"/api/categories/{academic['id']}").json()["name"] == "Academic"


def test_description_can_be_cleared(client, categories_by_name):
    academic = categories_by_name["Academic"]

    response = client.put(f"/api/categories/{academic['id']}", json={"description": None})

    assert response.status_code == 200
    assert response.json()["description"] is None
