from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

import web.main as main
from data.store import ComparisonStore
from web.main import app, get_store, set_candidates


@pytest.fixture
def client(monkeypatch):
    """Test client with a fresh four-candidate session."""
    monkeypatch.setattr(main, "store", ComparisonStore(["1", "2", "3", "4"]))
    return TestClient(app)


@pytest.mark.unit
class TestWebMainConfiguration:
    """Test web application configuration and utility functions."""

    def test_get_store_creates_empty_session(self, monkeypatch):
        monkeypatch.setattr(main, "store", None)
        monkeypatch.delenv(main.CANDIDATES_FILE_ENV, raising=False)

        session = get_store()

        assert session.candidates == []
        assert get_store() is session

    def test_get_store_from_environment(self, monkeypatch, candidates_file):
        monkeypatch.setattr(main, "store", None)
        monkeypatch.setenv(main.CANDIDATES_FILE_ENV, str(candidates_file))

        assert get_store().candidates == ["Alice", "Bob", "Charlie", "Diana"]

    def test_get_store_bad_candidate_file(self, monkeypatch, tmp_path):
        monkeypatch.setattr(main, "store", None)
        monkeypatch.setenv(main.CANDIDATES_FILE_ENV, str(tmp_path / "missing.txt"))

        with pytest.raises(Exception):
            get_store()
        assert main.store is None

    def test_set_candidates(self, monkeypatch):
        monkeypatch.setattr(main, "store", None)

        with patch("web.main.logger") as mock_logger:
            set_candidates(["a", "b"])

            assert get_store().candidates == ["a", "b"]
            mock_logger.info.assert_called()


@pytest.mark.unit
class TestCandidateEndpoints:
    def test_list_candidates(self, client):
        response = client.get("/api/candidates")

        assert response.status_code == 200
        assert response.json() == {"candidates": ["1", "2", "3", "4"]}

    def test_add_candidate(self, client):
        response = client.post("/api/candidates", json={"name": " 5 "})

        assert response.status_code == 201
        assert response.json()["candidate"] == "5"
        assert response.json()["candidates"][-1] == "5"

    def test_add_duplicate_candidate(self, client):
        response = client.post("/api/candidates", json={"name": "1"})

        assert response.status_code == 400
        assert "Duplicate" in response.json()["detail"]

    def test_add_candidate_missing_name(self, client):
        response = client.post("/api/candidates", json={})
        assert response.status_code == 422


@pytest.mark.unit
class TestVotingEndpoints:
    def test_root_reports_progress(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["progress"]["total_pairs"] == 6

    def test_next_ballot(self, client):
        client.post("/api/votes", json={"winner": "1", "loser": "2"})
        client.post("/api/votes", json={"winner": "3", "loser": "4"})

        response = client.get("/api/ballot")

        assert response.status_code == 200
        assert response.json() == {"ballot": ["2", "4"], "complete": False}

    def test_cast_vote(self, client):
        client.post("/api/votes", json={"winner": "1", "loser": "2"})
        client.post("/api/votes", json={"winner": "3", "loser": "4"})
        response = client.post("/api/votes", json={"winner": "2", "loser": "3"})

        assert response.status_code == 201
        data = response.json()
        assert data["votes"] == [
            ["1", "2"],
            ["3", "4"],
            ["2", "3"],
            ["1", "3"],
            ["2", "4"],
        ]
        assert data["progress"]["remaining_pairs"] == 1
        assert client.get("/api/votes").json()["votes"] == data["votes"]

    def test_cast_vote_unknown_candidate(self, client):
        response = client.post("/api/votes", json={"winner": "1", "loser": "9"})

        assert response.status_code == 400
        assert "Unknown candidate" in response.json()["detail"]

    def test_ballot_selection_failure(self, client):
        with patch.object(
            ComparisonStore, "next_ballot", side_effect=RuntimeError("boom")
        ):
            response = client.get("/api/ballot")

        assert response.status_code == 500
        assert "Ballot selection failed" in response.json()["detail"]


@pytest.mark.unit
class TestResultsEndpoints:
    def _vote_total_order(self, client):
        for winner, loser in [("1", "2"), ("2", "3"), ("3", "4"), ("1", "4")]:
            client.post("/api/votes", json={"winner": winner, "loser": loser})

    def test_partial_results(self, client):
        client.post("/api/votes", json={"winner": "4", "loser": "1"})

        data = client.get("/api/results").json()

        assert data["final"] is False
        assert data["ranking"][0] == "4"

    def test_final_results(self, client):
        self._vote_total_order(client)

        assert client.get("/api/ballot").json() == {"ballot": None, "complete": True}
        data = client.get("/api/results").json()
        assert data["final"] is True
        assert data["ranking"] == ["1", "2", "3", "4"]
        assert data["results"][0] == {
            "rank": 1,
            "candidate": "1",
            "wins": 3,
            "matchups": 3,
            "win_rate": 1.0,
        }

    def test_export_results_csv(self, client):
        self._vote_total_order(client)

        response = client.get("/api/export/results")

        assert response.status_code == 200
        assert "text/csv" in response.headers.get("content-type", "")
        lines = response.text.strip().splitlines()
        assert lines[0] == "rank,candidate,wins,matchups,win_rate"
        assert lines[1].startswith("1,1,3,3,")

    def test_reset_session(self, client):
        self._vote_total_order(client)

        response = client.delete("/api/session")

        assert response.status_code == 200
        assert response.json()["decided_pairs"] == 0
        assert client.get("/api/candidates").json()["candidates"] == [
            "1",
            "2",
            "3",
            "4",
        ]

    def test_reset_session_clearing_candidates(self, client):
        response = client.delete("/api/session", params={"clear_candidates": True})

        assert response.status_code == 200
        assert client.get("/api/candidates").json()["candidates"] == []
