from fastapi.testclient import TestClient

from morphseg.api import create_app

from conftest import VERB


def _client(compound_lexicon, make_analyzer):
    compound_lexicon.add("walk", 0, 0, 100, VERB, reading="wok")
    return TestClient(create_app(make_analyzer(compound_lexicon)))


def test_health(compound_lexicon, make_analyzer):
    client = _client(compound_lexicon, make_analyzer)
    assert client.get("/health").json() == {"ok": True}
    assert client.get("/").json()["analyze"] == "/analyze"


def test_analyze_endpoint(compound_lexicon, make_analyzer):
    client = _client(compound_lexicon, make_analyzer)
    resp = client.post("/analyze", json={"text": "cannot walk"})
    assert resp.status_code == 200
    body = resp.json()
    assert [m["surface"] for m in body] == ["cannot", " ", "walk"]
    assert body[2]["part_of_speech"][0] == "verb"
    assert body[1]["is_oov"] is True
    assert body[1]["dictionary_id"] < 0


def test_analyze_endpoint_fine_mode(compound_lexicon, make_analyzer):
    client = _client(compound_lexicon, make_analyzer)
    resp = client.post("/analyze", json={"text": "cannot", "mode": "A"})
    assert [m["surface"] for m in resp.json()] == ["can", "not"]


def test_analyze_endpoint_rejects_bad_mode(compound_lexicon, make_analyzer):
    client = _client(compound_lexicon, make_analyzer)
    resp = client.post("/analyze", json={"text": "cannot", "mode": "Z"})
    assert resp.status_code == 422
