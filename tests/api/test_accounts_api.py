"""
Tests for the chart-of-accounts endpoints.
"""


def account_payload(account_no=3010, **overrides):
    payload = {
        "account_no": account_no,
        "account_name": "Sales",
        "account_group": int(str(account_no)[0]),
        "tax_standard": "25%",
        "type": "P&L",
        "standard_side": "Credit",
    }
    payload.update(overrides)
    return payload


def test_create_account(client):
    response = client.post("/accounts", json=account_payload())

    assert response.status_code == 201
    data = response.json()
    assert data["account_no"] == 3010
    assert data["type"] == "P&L"
    assert data["standard_side"] == "Credit"


def test_create_duplicate_account_is_conflict(client):
    client.post("/accounts", json=account_payload())
    response = client.post("/accounts", json=account_payload())

    assert response.status_code == 409
    assert "already exists" in response.json()["detail"]


def test_group_out_of_range_is_rejected(client):
    response = client.post("/accounts", json=account_payload(account_group=9))
    assert response.status_code == 422


def test_unknown_side_is_rejected(client):
    response = client.post("/accounts", json=account_payload(standard_side="Left"))
    assert response.status_code == 422


def test_get_missing_account(client):
    response = client.get("/accounts/3010")
    assert response.status_code == 404


def test_list_accounts_by_group(client):
    client.post("/accounts", json=account_payload(1510, account_name="Receivables",
                                                  type="BS", standard_side="Debit"))
    client.post("/accounts", json=account_payload(3010))

    response = client.get("/accounts", params={"group": 3})

    assert response.status_code == 200
    assert [a["account_no"] for a in response.json()] == [3010]


def test_list_accounts_bad_group(client):
    response = client.get("/accounts", params={"group": 12})
    assert response.status_code == 400


def test_update_and_delete_account(client):
    client.post("/accounts", json=account_payload())

    update = account_payload()
    del update["account_no"]
    update["account_name"] = "Sales, export"
    response = client.put("/accounts/3010", json=update)
    assert response.status_code == 200
    assert response.json()["account_name"] == "Sales, export"

    assert client.delete("/accounts/3010").status_code == 204
    assert client.get("/accounts/3010").status_code == 404


def test_account_ledger_of_empty_account(client):
    client.post("/accounts", json=account_payload())

    response = client.get("/accounts/3010/ledger")

    assert response.status_code == 200
    assert response.json() == []


def test_account_ledger_bad_period(client):
    client.post("/accounts", json=account_payload())
    response = client.get("/accounts/3010/ledger", params={"period": "2025-1"})
    assert response.status_code == 400


def test_delete_account_with_postings_is_conflict(client):
    client.post("/accounts", json=account_payload())
    client.post("/accounts", json=account_payload(1510, account_name="Receivables",
                                                  type="BS", standard_side="Debit"))
    client.post(
        "/vouchers",
        headers={"X-User-ID": "7", "X-User-Role": "Bookkeeper"},
        json={
            "date": "2025-01-15",
            "description": "Sale",
            "period": "2025-01",
            "created_by": 7,
            "lines": [
                {"account_no": 3010, "credit_amount": "100"},
                {"account_no": 1510, "debit_amount": "100"},
            ],
        },
    )

    response = client.delete("/accounts/3010")

    assert response.status_code == 409
    assert client.get("/accounts/3010").status_code == 200
