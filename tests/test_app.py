"""Tests for the Flask form and JSON routes."""

import pytest

from app import create_app
from game_logic import VALIDATION_MESSAGE, WIN_MESSAGE


@pytest.fixture
def app():
    return create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "MAX_ATTEMPTS": 7,
        "DEFAULT_SECRET": None,
    })


@pytest.fixture
def client(app):
    return app.test_client()


def new_game(client, secret="hello"):
    return client.post("/api/new-game", json={"secret": secret})


def guess(client, word):
    return client.post("/api/guess", json={"guess": word})


class TestJsonApi:
    def test_guess_without_game(self, client):
        resp = guess(client, "hello")
        assert resp.status_code == 400
        assert resp.get_json() == {"success": False, "error": "No active game"}

    def test_new_game(self, client):
        resp = new_game(client)
        data = resp.get_json()
        assert resp.status_code == 200
        assert data["success"] is True
        assert data["attempts_left"] == 6
        assert data["pattern"] == "_____"
        assert "target" not in data

    def test_new_game_requires_secret(self, client):
        resp = client.post("/api/new-game", json={})
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Secret word required"

    def test_new_game_rejects_invalid_secret(self, client):
        resp = new_game(client, "hél1o")
        assert resp.status_code == 400
        assert resp.get_json()["error"] == VALIDATION_MESSAGE

    def test_new_game_uses_default_secret(self):
        client = create_app({"TESTING": True, "MAX_ATTEMPTS": 7, "DEFAULT_SECRET": "crane"}).test_client()
        assert client.post("/api/new-game", json={}).status_code == 200
        assert guess(client, "CRANE").get_json()["status"] == "won"

    def test_guess_feedback(self, client):
        new_game(client)
        data = guess(client, "holle").get_json()
        assert data["success"] is True
        assert data["guess"] == "HOLLE"
        assert data["feedback"] == ["correct", "present", "correct", "correct", "present"]
        assert data["glyphs"] == "🟩🟨🟩🟩🟨"
        assert data["pattern"] == "H_LL_"
        assert data["status"] == "in_progress"
        assert data["attempts_left"] == 5
        assert data["target"] is None

    def test_invalid_guess_does_not_count(self, client):
        new_game(client)
        resp = guess(client, "hell1")
        assert resp.status_code == 400
        assert resp.get_json()["error"] == VALIDATION_MESSAGE
        assert client.get("/api/state").get_json()["attempts_left"] == 6

    def test_win_then_reject_further_guesses(self, client):
        new_game(client)
        data = guess(client, "hello").get_json()
        assert data["status"] == "won"
        assert data["message"] == WIN_MESSAGE
        assert data["target"] == "HELLO"

        resp = guess(client, "world")
        assert resp.status_code == 400
        assert "won" in resp.get_json()["error"]

    def test_loss_after_six_guesses(self, client):
        new_game(client)
        for _ in range(5):
            assert guess(client, "world").get_json()["status"] == "in_progress"
        data = guess(client, "world").get_json()
        assert data["status"] == "lost"
        assert data["target"] == "HELLO"

        state = client.get("/api/state").get_json()
        assert state["games_lost"] == 1
        assert state["target"] == "HELLO"

    def test_state_without_game(self, client):
        assert client.get("/api/state").get_json() == {"active": False, "max_attempts": 7}

    @pytest.mark.parametrize("body", [["hello"], {"secret": 42}, {"secret": ["hello"]}, "hello"])
    def test_new_game_rejects_malformed_body(self, client, body):
        resp = client.post("/api/new-game", json=body)
        assert resp.status_code == 400
        assert resp.get_json() == {"success": False, "error": VALIDATION_MESSAGE}

    @pytest.mark.parametrize("body", [{"guess": 12345}, ["hello"], {"guess": None, "x": 1}])
    def test_guess_rejects_malformed_body(self, client, body):
        new_game(client)
        resp = client.post("/api/guess", json=body)
        assert resp.status_code == 400
        assert resp.get_json() == {"success": False, "error": VALIDATION_MESSAGE}
        assert client.get("/api/state").get_json()["attempts_left"] == 6

    def test_config_overrides_skip_bad_environment(self, monkeypatch):
        monkeypatch.setenv("WORDLE_MAX_ATTEMPTS", "seven")
        app = create_app({"TESTING": True, "MAX_ATTEMPTS": 5, "DEFAULT_SECRET": None})
        assert app.config["MAX_ATTEMPTS"] == 5
        with pytest.raises(ValueError):
            create_app({"TESTING": True, "DEFAULT_SECRET": None})


class TestStats:
    def test_empty_stats(self, client):
        assert client.get("/stats").get_json() == {
            "games_won": 0,
            "games_lost": 0,
            "total_games": 0,
            "win_rate": 0.0,
        }

    def test_tally_carries_across_rounds(self, client):
        new_game(client)
        guess(client, "hello")
        new_game(client, "crane")
        for _ in range(6):
            guess(client, "world")

        stats = client.get("/stats").get_json()
        assert stats["games_won"] == 1
        assert stats["games_lost"] == 1
        assert stats["win_rate"] == 50.0


class TestForm:
    def test_index_renders(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert "Wordle Game" in resp.get_data(as_text=True)

    def test_form_round(self, client):
        resp = client.post("/new-game", data={"secret": "hello"}, follow_redirects=True)
        assert "Attempts left: 6" in resp.get_data(as_text=True)

        resp = client.post("/guess", data={"guess": "holle"}, follow_redirects=True)
        page = resp.get_data(as_text=True)
        assert "Attempts left: 5" in page
        assert "🟩🟨🟩🟩🟨" in page
        assert "Suggested word: H_LL_" in page

        resp = client.post("/guess", data={"guess": "hello"}, follow_redirects=True)
        page = resp.get_data(as_text=True)
        assert WIN_MESSAGE in page
        assert "Games won: 1 | Games lost: 0" in page

    def test_form_reports_validation_error(self, client):
        client.post("/new-game", data={"secret": "hello"})
        resp = client.post("/guess", data={"guess": "hell"}, follow_redirects=True)
        page = resp.get_data(as_text=True)
        assert VALIDATION_MESSAGE in page
        assert "Attempts left: 6" in page

    def test_form_guess_without_game(self, client):
        resp = client.post("/guess", data={"guess": "hello"}, follow_redirects=True)
        assert "No active game" in resp.get_data(as_text=True)

    def test_form_new_game_without_secret(self, client):
        resp = client.post("/new-game", data={}, follow_redirects=True)
        assert "Enter a secret word to start a round." in resp.get_data(as_text=True)
