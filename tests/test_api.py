def _create_card(client, **overrides) -> dict:
    payload = {"name": "Millennia", "issuer": "HDFC", "last4_digits": "1234", "default_reward_rate": 1}
    payload.update(overrides)
    response = client.post("/cards", json=payload)
    assert response.status_code == 201
    return response.json()


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_recommend_with_empty_wallet(client) -> None:
    response = client.post("/recommend", json={"merchant": "Amazon", "category": "shopping", "amount": 500})

    assert response.status_code == 200
    assert response.json() == {"best_card": None, "all_cards": []}


def test_recommend_serializes_ranked_results(client) -> None:
    card_a = _create_card(client, name="A")
    card_b = _create_card(
        client,
        name="B",
        last4_digits="",
        default_reward_rate=2,
        default_reward_kind="Points",
        default_point_value=0.5,
    )
    rule = client.post(
        f"/cards/{card_b['id']}/rewards",
        json={
            "match_kind": "Merchant",
            "match_value": "amazon",
            "reward_rate": 10,
            "reward_kind": "Points",
            "point_value": 0.5,
        },
    )
    assert rule.status_code == 201

    body = client.post(
        "/recommend", json={"merchant": "AMAZON", "category": "shopping", "amount": 1000}
    ).json()

    best = body["best_card"]
    assert best == body["all_cards"][0]
    assert best["card"] == {
        "id": card_b["id"],
        "key": None,
        "name": "B",
        "issuer": "HDFC",
        "last4_digits": "",
        "masked_number": "",
    }
    assert best["reward_rate"] == 10
    assert best["reward_type"] == "Points"
    assert best["reward_value"] == 100
    assert best["cash_value"] == 50
    assert best["rule"] == {"type": "Merchant", "entity_name": "amazon", "reward_rate": 10}
    assert body["all_cards"][1]["card"]["id"] == card_a["id"]
    assert body["all_cards"][1]["card"]["masked_number"] == "**** 1234"
    assert body["all_cards"][1]["rule"] is None


def test_recommend_empty_user_cards(client) -> None:
    _create_card(client)

    body = client.post("/recommend", json={"category": "x", "amount": 10, "user_cards": []}).json()

    assert body == {"best_card": None, "all_cards": []}


def test_recommend_rejects_bad_amount(client) -> None:
    assert client.post("/recommend", json={"category": "x", "amount": 0}).status_code == 422
    assert client.post("/recommend", json={"category": "x", "amount": "lots"}).status_code == 422


def test_recommend_unexpected_failure_is_generic_500(client) -> None:
    from cardmax.api.app import app
    from cardmax.api.deps import get_orchestrator

    class Exploding:
        def recommend(self, request):
            raise KeyError("boom")

    app.dependency_overrides[get_orchestrator] = lambda: Exploding()
    response = client.post("/recommend", json={"category": "x", "amount": 10})

    assert response.status_code == 500
    assert response.json() == {"detail": "could not compute recommendations"}


def test_card_crud_and_cascade(client) -> None:
    card = _create_card(client)
    client.post(
        f"/cards/{card['id']}/rewards",
        json={"match_kind": "Category", "match_value": "dining", "reward_rate": 5},
    )

    updated = client.put(f"/cards/{card['id']}", json={"name": "Renamed", "default_reward_rate": 2})
    assert updated.status_code == 200
    assert updated.json()["name"] == "Renamed"
    assert len(client.get(f"/cards/{card['id']}/rewards").json()) == 1

    assert client.delete(f"/cards/{card['id']}").status_code == 204
    assert client.get(f"/cards/{card['id']}").status_code == 404
    assert client.get(f"/cards/{card['id']}/rewards").status_code == 404
    assert client.get("/cards").json() == []


def test_rule_without_point_value_is_rejected(client) -> None:
    card = _create_card(client)

    response = client.post(
        f"/cards/{card['id']}/rewards",
        json={"match_kind": "Merchant", "match_value": "uber", "reward_rate": 3, "reward_kind": "Miles"},
    )

    assert response.status_code == 400
    assert "point value" in response.json()["detail"]


def test_rule_update_and_delete(client) -> None:
    card = _create_card(client)
    rule = client.post(
        f"/cards/{card['id']}/rewards",
        json={"match_kind": "Merchant", "match_value": "uber", "reward_rate": 3},
    ).json()

    updated = client.put(
        f"/cards/{card['id']}/rewards/{rule['id']}",
        json={"match_kind": "Merchant", "match_value": "ola", "reward_rate": 4},
    )
    assert updated.json()["match_value"] == "ola"
    assert client.delete(f"/cards/{card['id']}/rewards/{rule['id']}").status_code == 204
    assert client.delete(f"/cards/{card['id']}/rewards/{rule['id']}").status_code == 404


def test_catalog_add_to_wallet(client) -> None:
    listing = client.get("/catalog").json()
    assert any(entry["key"] == "hdfc_millennia" for entry in listing)

    added = client.post("/catalog/hdfc_millennia/add", json={"last4_digits": "9876"})
    assert added.status_code == 201
    card = added.json()
    assert card["catalog_key"] == "hdfc_millennia"

    body = client.post("/recommend", json={"merchant": "Swiggy", "category": "food", "amount": 400}).json()
    assert body["best_card"]["card"]["key"] == "hdfc_millennia"
    assert body["best_card"]["cash_value"] == 20

    assert client.post("/catalog/unknown/add").status_code == 404


def test_transactions_flow(client) -> None:
    card = _create_card(client)
    client.post(
        f"/cards/{card['id']}/rewards",
        json={"match_kind": "Category", "match_value": "dining", "reward_rate": 5},
    )

    created = client.post(
        "/transactions",
        json={
            "date": "2024-04-02",
            "merchant": "Toit",
            "category": "dining",
            "amount": 2000,
            "card_id": card["id"],
        },
    )
    assert created.status_code == 201
    txn = created.json()
    assert txn["reward_earned"] == 100

    client.post(
        "/transactions",
        json={"date": "2024-04-05", "merchant": "Shell", "category": "fuel", "amount": 1000, "card_id": card["id"]},
    )

    assert [t["merchant"] for t in client.get("/transactions").json()] == ["Shell", "Toit"]
    assert len(client.get("/transactions", params={"category": "DINING"}).json()) == 1
    assert len(client.get("/transactions", params={"date_from": "2024-04-03"}).json()) == 1

    summary = client.get("/transactions/summary").json()
    assert summary == {
        "count": 2,
        "total_spent": 3000,
        "total_rewards": 110,
        "average_reward_rate": summary["average_reward_rate"],
    }
    assert abs(summary["average_reward_rate"] - 110 / 3000 * 100) < 1e-9

    assert client.get(f"/transactions/{txn['id']}").json()["merchant"] == "Toit"
    assert client.delete(f"/transactions/{txn['id']}").status_code == 204
    assert client.get(f"/transactions/{txn['id']}").status_code == 404


def test_transaction_for_missing_card(client) -> None:
    response = client.post("/transactions", json={"merchant": "m", "amount": 10, "card_id": 77})

    assert response.status_code == 404
