"""Testes HTTP: payload de erro, adega ativa, alocação, vinhos e sugestões."""


def _create_layout(client, name="Cozinha", shelves=6, columns=5):
    response = client.post("/layouts", json={"name": name, "shelves": shelves, "columns": columns})
    assert response.status_code == 201
    return response.json()


def _create_wine(client, producer="Ridge", **fields):
    response = client.post("/wines", json={"producer": producer, **fields})
    assert response.status_code == 201
    return response.json()


def _assign(client, wine_id, fridge_id, shelf=2, column=3, depth="FRONT"):
    return client.post("/cellar/assign", json={
        "wine_id": wine_id,
        "fridge_id": fridge_id,
        "shelf": shelf,
        "column_position": column,
        "depth": depth,
    })


def test_layout_validation_returns_all_fields(client):
    response = client.post("/layouts", json={"name": "", "shelves": 3, "columns": 12})

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "validation_error"
    assert set(error["fields"]) == {"name", "shelves", "columns"}


def test_layout_crud(client):
    layout = _create_layout(client)

    patched = client.patch(f"/layouts/{layout['id']}", json={"shelves": 8})
    assert patched.status_code == 200
    assert patched.json()["shelves"] == 8
    assert patched.json()["columns"] == 5

    assert client.get(f"/layouts/{layout['id']}").json()["name"] == "Cozinha"
    assert client.get("/layouts/999").status_code == 404


def test_deleting_last_layout_is_rejected(client):
    first = _create_layout(client, "A")
    second = _create_layout(client, "B")

    assert client.delete(f"/layouts/{first['id']}").status_code == 204

    response = client.delete(f"/layouts/{second['id']}")
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "last_layout"
    assert [l["id"] for l in client.get("/layouts").json()] == [second["id"]]


def test_list_layouts_creates_default(client):
    layouts = client.get("/layouts").json()
    assert len(layouts) == 1
    assert layouts[0]["name"] == "Default Layout"


def test_active_layout_cookie_flow(client):
    first = _create_layout(client, "A")
    second = _create_layout(client, "B")

    assert client.get("/layouts/active").json()["id"] == first["id"]
    assert client.cookies.get("active_layout_id") == str(first["id"])

    chosen = client.put("/layouts/active", json={"layout_id": second["id"]})
    assert chosen.status_code == 200
    assert client.get("/layouts/active").json()["id"] == second["id"]

    # Ponteiro obsoleto cai para a primeira adega
    client.delete(f"/layouts/{second['id']}")
    assert client.get("/layouts/active").json()["id"] == first["id"]
    assert client.cookies.get("active_layout_id") == str(first["id"])

    assert client.put("/layouts/active", json={"layout_id": 999}).status_code == 404


def test_occupied_slot_returns_conflict(client):
    layout = _create_layout(client)
    ridge = _create_wine(client, "Ridge")
    turley = _create_wine(client, "Turley")

    first = _assign(client, ridge["id"], layout["id"])
    assert first.status_code == 201
    assert first.json()["human_code"] == "S2·C3·Front"

    second = _assign(client, turley["id"], layout["id"])
    assert second.status_code == 409
    error = second.json()["error"]
    assert error["code"] == "slot_occupied"
    assert "S2·C3·Front" in error["message"]

    assert _assign(client, turley["id"], layout["id"], depth="BACK").status_code == 201


def test_assign_out_of_bounds(client):
    layout = _create_layout(client)
    wine = _create_wine(client)

    response = _assign(client, wine["id"], layout["id"], shelf=7)
    assert response.status_code == 422
    assert "shelf" in response.json()["error"]["fields"]


def test_move_and_remove(client):
    layout = _create_layout(client)
    wine = _create_wine(client)
    assignment = _assign(client, wine["id"], layout["id"], 1, 1).json()

    moved = client.post("/cellar/move", json={
        "wine_id": wine["id"],
        "from_assignment_id": assignment["id"],
        "to_fridge_id": layout["id"],
        "to_shelf": 4,
        "to_column_position": 5,
        "to_depth": "BACK",
    })
    assert moved.status_code == 200
    assert moved.json()["human_code"] == "S4·C5·Back"

    removed = client.delete(f"/cellar/slots/{moved.json()['id']}")
    assert removed.json() == {"removed": True}
    assert client.delete(f"/cellar/slots/{moved.json()['id']}").json() == {"removed": False}

    movements = client.get("/cellar/movements").json()
    assert [m["type"] for m in movements] == ["REMOVE", "MOVE", "PLACE"]


def test_occupancy_and_listings(client):
    layout = _create_layout(client, shelves=6, columns=10)
    ridge = _create_wine(client, "Ridge", vintage=2016)
    _create_wine(client, "Turley")
    _assign(client, ridge["id"], layout["id"], 1, 1)

    occupancy = client.get(f"/cellar/{layout['id']}/occupancy").json()
    assert occupancy["total_slots"] == 120
    assert occupancy["occupied_slots"] == 1
    assert occupancy["free_slots"] == 119
    assert occupancy["occupancy_percentage"] == 1
    assert occupancy["slots"][0]["is_occupied"] is True
    assert occupancy["slots"][0]["wine"]["producer"] == "Ridge"

    placed = client.get(f"/cellar/{layout['id']}/wines").json()
    assert [p["wine"]["id"] for p in placed] == [ridge["id"]]

    unassigned = client.get("/cellar/unassigned").json()
    assert [w["producer"] for w in unassigned] == ["Turley"]

    assert client.get("/cellar/999/occupancy").status_code == 404


def test_wine_validation_errors(client):
    response = client.post("/wines", json={"producer": "  "})
    assert response.status_code == 422

    response = client.post("/wines", json={
        "producer": "Ridge", "drink_window_from": 2040, "drink_window_to": 2030
    })
    assert response.status_code == 422


def test_wine_update_and_undo(client):
    wine = _create_wine(client, "Ridge", vintage=2016, country_code="us")
    assert wine["country_code"] == "US"

    patched = client.patch(f"/wines/{wine['id']}", json={"vintage": 2017})
    assert patched.json()["vintage"] == 2017

    history = client.get(f"/wines/{wine['id']}/history").json()
    assert history[0]["changes"] == [{"field": "vintage", "previous": 2016, "current": 2017}]

    undone = client.post(f"/wines/{wine['id']}/undo")
    assert undone.status_code == 200
    body = undone.json()
    assert body["wine"]["vintage"] == 2016
    assert body["restored"] == [{"field": "vintage", "previous": 2017, "current": 2016}]

    nothing = client.post(f"/wines/{wine['id']}/undo")
    assert nothing.status_code == 409
    assert nothing.json()["error"]["code"] == "undo_unavailable"


def test_mark_drunk_and_delete(client):
    layout = _create_layout(client)
    wine = _create_wine(client)
    _assign(client, wine["id"], layout["id"])

    drunk = client.post(f"/wines/{wine['id']}/drunk", json={"drank_on": "2026-05-01"})
    assert drunk.status_code == 200
    assert drunk.json()["status"] == "Drunk"
    assert drunk.json()["drank_on"] == "2026-05-01"
    assert client.get(f"/cellar/{layout['id']}/occupancy").json()["occupied_slots"] == 0

    drunk_list = client.get("/wines", params={"status": "Drunk"}).json()
    assert [w["id"] for w in drunk_list] == [wine["id"]]

    assert client.delete(f"/wines/{wine['id']}").status_code == 204
    assert client.get(f"/wines/{wine['id']}").status_code == 404


def test_list_wines_rejects_unknown_sort(client):
    response = client.get("/wines", params={"sort": "price"})
    assert response.status_code == 422
    assert "sort" in response.json()["error"]["fields"]


def test_enrichment_endpoints(client):
    wine = _create_wine(client, "Ridge", wine_name="Monte Bello", vintage=2016)
    base = f"/wines/{wine['id']}/enrichment"

    request = client.get(f"{base}/request").json()
    assert request["producer"] == "Ridge"

    recorded = client.post(base, json={"result": {
        "tasting_notes": "Cassis",
        "critic_scores": {"wine_spectator": 96},
        "confidence": 0.9,
    }})
    assert recorded.status_code == 200
    assert "tasting_notes" in recorded.json()["ai_enrichment"]

    applied = client.post(f"{base}/tasting_notes/apply").json()
    assert applied["notes"] == "Cassis"

    dismissed = client.post(f"{base}/critic_scores/dismiss").json()
    assert dismissed["ai_enrichment"] is None
    assert dismissed["score_wine_spectator"] is None

    assert client.post(f"{base}/price/apply").status_code == 422

    failed = client.post(base, json={"error": "timeout"}).json()
    assert failed["ai_last_error"] == "Enrichment failed: timeout"

    assert client.delete(base).json()["ai_confidence"] is None


def test_dashboard(client):
    layout = _create_layout(client)
    placed = _create_wine(client, "Ridge")
    _create_wine(client, "Turley")
    _assign(client, placed["id"], layout["id"])

    dashboard = client.get("/").json()

    assert [l["id"] for l in dashboard["layouts"]] == [layout["id"]]
    assert dashboard["wines_cellared"] == 2
    assert dashboard["wines_unassigned"] == 1
    assert dashboard["recent_movements"][0]["type"] == "PLACE"


def test_patch_rejects_null_required_fields(client):
    wine = _create_wine(client, "Ridge")

    for field in ("producer", "status", "bottle_size"):
        response = client.patch(f"/wines/{wine['id']}", json={field: None})
        assert response.status_code == 422

    assert client.patch(f"/wines/{wine['id']}", json={"producer": "  "}).status_code == 422
    assert client.get(f"/wines/{wine['id']}").json()["producer"] == "Ridge"


def test_patch_status_drunk_frees_slot(client):
    layout = _create_layout(client)
    wine = _create_wine(client)
    _assign(client, wine["id"], layout["id"])

    patched = client.patch(f"/wines/{wine['id']}", json={"status": "Drunk"})

    assert patched.status_code == 200
    assert client.get(f"/cellar/{layout['id']}/occupancy").json()["occupied_slots"] == 0
    assert client.get("/cellar/movements").json()[0]["type"] == "REMOVE"
