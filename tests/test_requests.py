def test_create_request_for_existing_item(client, make_item):
    item = make_item(name="Cola")

    response = client.post(
        "/requests",
        json={"item_id": item.id, "customer_name": "Ann", "customer_phone": "  "},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["item_id"] == item.id
    assert body["item_name"] == "Cola"
    assert body["custom_item_name"] is None
    assert body["customer_name"] == "Ann"
    assert body["customer_phone"] is None


def test_create_request_with_custom_name(client):
    response = client.post("/requests", json={"custom_item_name": " Ginger beer "})

    assert response.status_code == 201
    body = response.json()
    assert body["item_id"] is None
    assert body["item_name"] is None
    assert body["custom_item_name"] == "Ginger beer"


def test_request_needs_exactly_one_target(client, make_item):
    item = make_item()

    assert client.post("/requests", json={}).status_code == 422
    assert client.post("/requests", json={"custom_item_name": "   "}).status_code == 422
    assert (
        client.post("/requests", json={"item_id": item.id, "custom_item_name": "Cola"}).status_code
        == 422
    )


def test_request_for_unknown_item(client):
    assert client.post("/requests", json={"item_id": 404}).status_code == 404


def test_list_newest_first_and_fulfil(client, make_item):
    item = make_item()
    first = client.post("/requests", json={"item_id": item.id}).json()
    second = client.post("/requests", json={"custom_item_name": "Tea"}).json()

    listed = client.get("/requests").json()
    assert [entry["id"] for entry in listed] == [second["id"], first["id"]]

    assert client.delete(f"/requests/{first['id']}").status_code == 204
    assert [entry["id"] for entry in client.get("/requests").json()] == [second["id"]]
    assert client.delete(f"/requests/{first['id']}").status_code == 404
