from fastapi.testclient import TestClient

from server.play_service import app

client = TestClient(app)


def start(**overrides):
    body = {"target_score": 300, "seed": 3, "opponent": "heuristic"}
    body.update(overrides)
    response = client.post("/session/start", json=body)
    assert response.status_code == 200
    payload = response.json()
    return payload["session_id"], payload["state"]


def test_start_session_waits_for_human_bid():
    session_id, state = start()
    obs = state["observation"]
    assert obs["phase"] == "bidding"
    assert obs["seat"] == 0
    assert len(obs["hand"]) == 13
    assert obs["bidding_context"]["your_turn_to_bid"]
    assert len(obs["bidding_context"]["bids_so_far"]) == 3
    assert state["matchComplete"] is False


def test_rejected_actions_return_400():
    session_id, _ = start()
    response = client.post(f"/session/{session_id}/bid", json={"value": 20})
    assert response.status_code == 400
    assert response.json()["detail"]["reason"] == "invalid_bid"

    response = client.post(f"/session/{session_id}/play", json={"card": "AS"})
    assert response.status_code == 400
    assert response.json()["detail"]["reason"] == "wrong_phase"


def test_bid_then_play_a_legal_card():
    session_id, _ = start()
    response = client.post(f"/session/{session_id}/bid", json={"value": 3})
    assert response.status_code == 200
    context = response.json()["state"]["observation"]["playing_context"]
    assert context["your_turn_to_play"]

    response = client.post(f"/session/{session_id}/play", json={"card": "nope"})
    assert response.json()["detail"]["reason"] == "invalid_card"

    card = context["legal_plays"][0]
    response = client.post(f"/session/{session_id}/play", json={"card": card})
    assert response.status_code == 200
    assert card not in response.json()["state"]["observation"]["hand"]


def test_unknown_session_is_404():
    assert client.get("/session/missing").status_code == 404


def test_end_session():
    session_id, _ = start()
    assert client.delete(f"/session/{session_id}").status_code == 200
    assert client.get(f"/session/{session_id}").status_code == 404
