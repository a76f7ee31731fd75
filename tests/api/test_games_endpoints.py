from fastapi.testclient import TestClient


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_hole_points(client: TestClient) -> None:
    response = client.post("/points/hole", json={"strokes": {"A": 4, "B": 4, "C": 6}})

    assert response.status_code == 200
    assert response.json() == {"points": {"A": 4, "B": 4, "C": 1}}


def test_hole_points_unsupported_player_count(client: TestClient) -> None:
    response = client.post("/points/hole", json={"strokes": {"A": 4}, "player_count": 1})

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "unsupported_player_count"


def test_round_points(client: TestClient) -> None:
    response = client.post(
        "/points/round",
        json={
            "players": ["A", "B"],
            "strokes_by_hole": {"1": {"A": 3, "B": 4}, "2": {"A": 5, "B": 5}, "3": {"A": 4}},
        },
    )

    assert response.status_code == 200
    assert response.json() == {
        "points_by_hole": {"1": {"A": 2, "B": 0}, "2": {"A": 1, "B": 1}},
        "totals": {"A": 3, "B": 1},
    }


def test_cards_net(client: TestClient) -> None:
    response = client.post(
        "/games/cards/net",
        json={
            "players": [{"id": "A", "name": "Alice"}, {"id": "B", "name": "Bob"}],
            "history": [
                {"card_id": "camel", "player_id": "B", "card_value": 4},
                {"card_id": "camel", "player_id": "A", "card_value": 4},
            ],
        },
    )

    assert response.status_code == 200
    assert response.json() == {"total_pot": 4.0, "debts": {"A": 4.0, "B": 0.0}, "net": {"A": -4.0, "B": 4.0}}


def test_cards_net_equal_split_formula(client: TestClient) -> None:
    response = client.post(
        "/games/cards/net",
        json={
            "players": [{"id": "A"}, {"id": "B"}],
            "history": [{"card_id": "camel", "player_id": "A", "card_value": 4}],
            "formula": "equal_split",
        },
    )

    assert response.json()["net"] == {"A": -2.0, "B": 2.0}


def test_cards_net_rejects_negative_value(client: TestClient) -> None:
    response = client.post(
        "/games/cards/net",
        json={"history": [{"card_id": "camel", "player_id": "A", "card_value": -4}]},
    )

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "validation_error"


def test_points_net(client: TestClient) -> None:
    response = client.post("/games/points/net", json={"total_points": {"A": 10, "B": 4}, "point_value": 1.0})

    assert response.status_code == 200
    assert response.json() == {"net": {"A": 6.0, "B": -6.0}}


def test_fbt_net_tied_front_nine(client: TestClient) -> None:
    strokes = {str(hole): {"A": 4, "B": 4} for hole in range(1, 10)}
    strokes.update({str(hole): {"A": 4, "B": 5} for hole in range(10, 19)})

    response = client.post("/games/fbt/net", json={"strokes_by_hole": strokes, "fbt_value": 10})

    assert response.status_code == 200
    assert response.json() == {"net": {"A": 20.0, "B": -20.0}}
