from decimal import Decimal

from wiremill.models import Item


def _challan_body(api_masters, **overrides):
    body = {
        "party_id": api_masters["party"],
        "finish_size_id": api_masters["fg_item"],
        "original_size_id": api_masters["rm_item"],
        "annealing_count": 2,
        "draw_pass_count": 3,
        "quantity": "40",
        "rate": "50",
    }
    body.update(overrides)
    return body


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_challan_round_trip(client, api_masters):
    response = client.post("/outward-challans", json=_challan_body(api_masters))
    assert response.status_code == 201
    challan = response.json()
    assert challan["challan_number"] == "CH0001"
    assert Decimal(challan["total_amount"]) == Decimal("2410.00")

    rm = client.get(f"/stock/RM/{api_masters['rm_item']}").json()
    fg = client.get(f"/stock/FG/{api_masters['fg_item']}").json()
    assert Decimal(rm["quantity"]) == 60
    assert Decimal(fg["quantity"]) == 40

    response = client.put(f"/outward-challans/{challan['id']}", json={"quantity": "50"})
    assert response.status_code == 200
    assert Decimal(response.json()["quantity"]) == 50

    response = client.delete(f"/outward-challans/{challan['id']}")
    assert response.status_code == 200
    summary = response.json()
    assert Decimal(summary["rm_quantity"]) == 100
    assert Decimal(summary["fg_quantity"]) == 0
    assert client.get(f"/outward-challans/{challan['id']}").status_code == 404


def test_insufficient_stock_error_body(client, api_masters):
    response = client.post("/outward-challans", json=_challan_body(api_masters, quantity="150"))

    assert response.status_code == 409
    body = response.json()
    assert body["code"] == "insufficient_stock"
    assert body["details"]["available"] == 100
    assert body["details"]["required"] == 150
    assert "Insufficient RM stock" in body["message"]


def test_process_range_error_body(client, api_masters):
    response = client.post(
        "/bom",
        json={"fg_size": "5mm", "rm_size": "8mm", "grade": "MS", "annealing_min": 1, "annealing_max": 3},
    )
    assert response.status_code == 201

    db = client.app.state.session_factory()
    try:
        item = Item(category="FG", size="5mm", grade="MS", mill="Tata Steel", hsn_code="7217")
        db.add(item)
        db.commit()
        fg_id = item.id
    finally:
        db.close()

    response = client.post(
        "/outward-challans",
        json=_challan_body(api_masters, finish_size_id=fg_id, annealing_count=5),
    )
    assert response.status_code == 422
    body = response.json()
    assert body["code"] == "process_out_of_range"
    assert body["details"] == {"field": "annealing", "value": 5, "min": 1, "max": 3}


def test_request_body_validation_stays_422(client, api_masters):
    response = client.post("/outward-challans", json=_challan_body(api_masters, annealing_count=8))
    assert response.status_code == 422
    assert "detail" in response.json()


def test_invoice_endpoints(client, api_masters):
    challan = client.post("/outward-challans", json=_challan_body(api_masters)).json()

    response = client.post("/tax-invoices", json={"conversion_id": challan["id"]})
    assert response.status_code == 201
    invoice = response.json()
    assert invoice["invoice_number"] == "INV0001"
    assert Decimal(invoice["gst_amount"]) == Decimal("433.80")
    assert Decimal(invoice["total_amount"]) == Decimal("2843.80")

    duplicate = client.post("/tax-invoices", json={"conversion_id": challan["id"]})
    assert duplicate.status_code == 409
    assert duplicate.json()["code"] == "duplicate_invoice"

    blocked = client.delete(f"/outward-challans/{challan['id']}")
    assert blocked.status_code == 409
    assert blocked.json()["code"] == "conflict"

    assert len(client.get("/tax-invoices").json()) == 1
    response = client.delete(f"/tax-invoices/{invoice['id']}")
    assert response.json()["message"] == "Invoice INV0001 deleted successfully"
    assert client.delete(f"/outward-challans/{challan['id']}").status_code == 200


def test_bom_endpoints(client, api_masters):
    rules = client.get("/bom").json()
    assert [rule["fg_size"] for rule in rules] == ["6mm"]

    options = client.get(f"/bom/options/{api_masters['rm_item']}").json()
    assert [rule["id"] for rule in options] == [api_masters["rule"]]

    resolved = client.get(f"/bom/resolve/{api_masters['fg_item']}").json()
    assert resolved["rm_size"] == "8mm"

    by_rm = client.get("/bom/by-rm", params={"rm_size": "8mm"}).json()
    assert len(by_rm) == 1

    clash = client.post("/bom", json={"fg_size": "6mm", "rm_size": "8mm", "grade": "MS"})
    assert clash.status_code == 409

    inverted = client.put(
        f"/bom/{api_masters['rule']}",
        json={"fg_size": "6mm", "rm_size": "8mm", "grade": "MS", "draw_pass_min": 6, "draw_pass_max": 2},
    )
    assert inverted.status_code == 400
    assert inverted.json()["details"]["field"] == "draw_pass_min"

    assert client.delete(f"/bom/{api_masters['rule']}").json() == {"ok": True, "id": api_masters["rule"]}
    assert client.get(f"/bom/{api_masters['rule']}").status_code == 404


def test_category_mismatch_is_400(client, api_masters):
    response = client.get(f"/bom/options/{api_masters['fg_item']}")
    assert response.status_code == 400
    assert response.json()["code"] == "category_mismatch"


def test_grn_endpoints(client, api_masters):
    response = client.post(
        "/grn",
        json={
            "sending_party_id": api_masters["party"],
            "party_challan_number": "PC-77",
            "rm_item_id": api_masters["rm_item"],
            "quantity": "20",
            "rate": "60",
        },
    )
    assert response.status_code == 201
    receipt = response.json()
    assert Decimal(receipt["total_value"]) == 1200

    stock = client.get("/stock", params={"category": "RM"}).json()
    assert [Decimal(entry["quantity"]) for entry in stock] == [120]
    assert stock[0]["size"] == "8mm"

    assert len(client.get("/grn").json()) == 1
    assert client.delete(f"/grn/{receipt['id']}").json() == {"ok": True, "id": receipt["id"]}
    assert Decimal(client.get(f"/stock/RM/{api_masters['rm_item']}").json()["quantity"]) == 100


def test_unknown_category_rejected(client):
    assert client.get("/stock/XX/1").status_code == 422
