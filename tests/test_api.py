from jose import jwt

from litle_plugin.models import ApiCall
from litle_plugin.transactions import TransactionStore


def test_search_endpoint(client, create_payment_method):
    create_payment_method()
    create_payment_method(kb_payment_method_id="66-77-88-99", litle_token="49384029302")

    response = client.get("/payment-methods/search", params={"search_key": "ccType", "limit": 1})

    assert response.status_code == 200
    body = response.json()
    assert body["current_offset"] == 0
    assert body["next_offset"] == 1
    assert body["total_nb_records"] == 2
    assert body["max_nb_records"] == 2
    assert [r["external_payment_method_id"] for r in body["records"]] == ["38102343"]
    assert body["records"][0]["type"] == "CreditCard"


def test_search_endpoint_numeric_key(client, create_payment_method):
    create_payment_method()

    response = client.get("/payment-methods/search", params={"search_key": "1234"})
    assert response.json()["total_nb_records"] == 1

    response = client.get("/payment-methods/search", params={"search_key": "123"})
    assert response.json()["total_nb_records"] == 0
    assert response.json()["records"] == []


def test_get_payment_method(client, create_payment_method):
    create_payment_method()

    response = client.get("/payment-methods/55-66-77-88")

    assert response.status_code == 200
    assert response.json()["cc_name"] == "ccFirstName ccLastName"
    assert response.json()["properties"][0] == {"key": "token", "value": "38102343"}


def test_get_payment_method_info(client, create_payment_method):
    create_payment_method()

    response = client.get("/payment-methods/55-66-77-88/info")

    assert response.status_code == 200
    assert response.json() == {
        "account_id": "11-22-33-44",
        "payment_method_id": "55-66-77-88",
        "external_payment_method_id": "38102343",
        "is_default": False,
    }


def test_get_payment_method_not_found(client):
    response = client.get("/payment-methods/unknown")

    assert response.status_code == 404
    assert response.json()["detail"] == "No payment method found for payment method unknown"


def test_get_payment_method_ambiguous(client, create_payment_method):
    create_payment_method()
    create_payment_method(litle_token="49384029302")

    response = client.get("/payment-methods/55-66-77-88")

    assert response.status_code == 409


def test_account_payment_methods(client, create_payment_method):
    create_payment_method()

    response = client.get("/accounts/11-22-33-44/payment-methods")

    assert response.status_code == 200
    assert [pm["payment_method_id"] for pm in response.json()] == ["55-66-77-88"]


def test_delete_payment_method(client, create_payment_method):
    create_payment_method()

    response = client.delete("/payment-methods/55-66-77-88")
    assert response.status_code == 200
    assert response.json() == {"status": "deleted"}

    assert client.get("/payment-methods/55-66-77-88").status_code == 404
    assert client.get("/accounts/11-22-33-44/payment-methods").json() == []


def test_transaction_lookups(client, db):
    store = TransactionStore(db)
    store.record("payment-1", ApiCall.CHARGE, "txn-1", 1000)
    store.record("payment-1", ApiCall.REFUND, "txn-2", 400)

    charge = client.get("/payments/payment-1/charge").json()
    assert charge["api_call"] == "charge"
    assert charge["litle_txn_id"] == "txn-1"

    refund = client.get("/payments/payment-1/refund").json()
    assert refund["api_call"] == "refund"
    assert refund["amount_in_cents"] == 400


def test_refund_candidate(client, db):
    TransactionStore(db).record("payment-1", ApiCall.CHARGE, "txn-1", 1000)

    response = client.get("/payments/payment-1/refund-candidate", params={"amount_in_cents": 1000})
    assert response.status_code == 200
    assert response.json()["litle_txn_id"] == "txn-1"

    response = client.get("/payments/payment-1/refund-candidate", params={"amount_in_cents": 1001})
    assert response.status_code == 422
    assert "too large to refund" in response.json()["detail"]

    response = client.get("/payments/payment-2/refund-candidate", params={"amount_in_cents": 10})
    assert response.status_code == 404


def test_requires_bearer_token(unauthenticated_client):
    response = unauthenticated_client.get(
        "/payment-methods/search",
        params={"search_key": "foo"},
        headers={"Authorization": "Basic abc"},
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid or missing token"


def test_rejects_invalid_token(unauthenticated_client):
    response = unauthenticated_client.get(
        "/payment-methods/search",
        params={"search_key": "foo"},
        headers={"Authorization": "Bearer not-a-jwt"},
    )

    assert response.status_code == 401


def test_accepts_valid_token(unauthenticated_client):
    token = jwt.encode({"sub": "killbill"}, "test-secret", algorithm="HS256")

    response = unauthenticated_client.get(
        "/payment-methods/search",
        params={"search_key": "foo"},
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 200
    assert response.json()["total_nb_records"] == 0


def test_search_endpoint_oversized_numeric_key(client, create_payment_method):
    create_payment_method()

    response = client.get("/payment-methods/search", params={"search_key": "9" * 30})

    assert response.status_code == 200
    assert response.json()["total_nb_records"] == 0


def test_search_endpoint_non_decimal_digit_key(client, create_payment_method):
    create_payment_method()

    response = client.get("/payment-methods/search", params={"search_key": "²"})

    assert response.status_code == 200
    assert response.json()["total_nb_records"] == 0
