import os
from flask import Flask, current_app, flash, jsonify, redirect, render_template, request, session, url_for
from config import get_default_secret, get_max_attempts, setup_logging
from game import GameOverError, GameSession, Tally
from game_logic import VALIDATION_MESSAGE, WIN_MESSAGE, ValidationError, blank_pattern

SESSION_KEY = "game"
LAST_TURN_KEY = "last_turn"


# Flask app setup
def create_app(config=None):
    """Factory function to create and configure Flask app."""
    app = Flask(__name__)
    app.config["SECRET_KEY"] = os.environ.get("SECRET_KEY", "dev-secret-change-in-production")
    config = dict(config or {})
    if "MAX_ATTEMPTS" not in config:
        config["MAX_ATTEMPTS"] = get_max_attempts()
    if "DEFAULT_SECRET" not in config:
        config["DEFAULT_SECRET"] = get_default_secret()
    app.config.update(config)

    register_routes(app)
    return app


def load_game():
    """Restore the current round from the client session, if any."""
    data = session.get(SESSION_KEY)
    if not data:
        return None
    return GameSession.from_dict(data)


def save_game(game, last_turn=None):
    session[SESSION_KEY] = game.to_dict()
    session[LAST_TURN_KEY] = last_turn


def start_game(secret):
    """Open a round, keeping the tally of the previous one."""
    previous = load_game()
    tally = previous.tally if previous else Tally()
    game = GameSession.start(secret, current_app.config["MAX_ATTEMPTS"], tally)
    save_game(game)
    current_app.logger.info("New round started, tally %r", tally)
    return game


def json_text(field):
    """Read a string field from the JSON body; anything else fails validation."""
    data = request.get_json(silent=True)
    if data is None:
        return ""
    if not isinstance(data, dict):
        raise ValidationError(VALIDATION_MESSAGE)
    value = data.get(field)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(VALIDATION_MESSAGE)
    return value.strip()


def state_payload(game):
    if game is None:
        return {"active": False, "max_attempts": current_app.config["MAX_ATTEMPTS"]}
    payload = {
        "active": True,
        "status": game.status,
        "attempts_left": game.attempts_left,
        "max_attempts": game.max_attempts,
        "pattern": game.pattern,
        "games_won": game.tally.won,
        "games_lost": game.tally.lost,
        "last_turn": session.get(LAST_TURN_KEY),
    }
    if not game.in_progress:
        payload["target"] = game.secret
    return payload


def register_routes(app):

    # --------------------
    # Form routes
    # --------------------
    @app.route("/")
    def index():
        """Serve the game page."""
        game = load_game()
        return render_template(
            "index.html",
            game=game,
            last_turn=session.get(LAST_TURN_KEY),
            pattern=game.pattern if game else blank_pattern(),
            win_message=WIN_MESSAGE,
            has_default_secret=bool(app.config["DEFAULT_SECRET"]),
        )

    @app.route("/new-game", methods=["POST"])
    def new_game_form():
        """Start a round from the submitted secret word."""
        secret = (request.form.get("secret") or "").strip() or app.config["DEFAULT_SECRET"]
        if not secret:
            flash("Enter a secret word to start a round.")
            return redirect(url_for("index"))
        try:
            start_game(secret)
        except ValidationError as e:
            flash(str(e))
        return redirect(url_for("index"))

    @app.route("/guess", methods=["POST"])
    def guess_form():
        """Evaluate the submitted guess and show the result."""
        game = load_game()
        if game is None:
            flash("No active game")
            return redirect(url_for("index"))

        guess = (request.form.get("guess") or "").strip()
        try:
            turn = game.submit_guess(guess)
        except (ValidationError, GameOverError) as e:
            app.logger.debug("Rejected guess %r: %s", guess, e)
            flash(str(e))
            return redirect(url_for("index"))

        save_game(game, turn.to_dict())
        if turn.won:
            flash(WIN_MESSAGE)
        elif turn.over:
            flash(f"You've used all your attempts. The word was: {game.secret}")
        return redirect(url_for("index"))

    # --------------------
    # JSON API
    # --------------------
    @app.route("/api/new-game", methods=["POST"])
    def new_game():
        """Start a round; body {"secret": "..."} or the configured default."""
        try:
            secret = json_text("secret") or app.config["DEFAULT_SECRET"]
            if not secret:
                return jsonify({"success": False, "error": "Secret word required"}), 400
            game = start_game(secret)
        except ValidationError as e:
            return jsonify({"success": False, "error": str(e)}), 400

        return jsonify({"success": True, "message": "New game started", **state_payload(game)})

    @app.route("/api/guess", methods=["POST"])
    def make_guess():
        """Process player's word guess."""
        game = load_game()
        if game is None:
            return jsonify({"success": False, "error": "No active game"}), 400

        try:
            guess = json_text("guess")
            turn = game.submit_guess(guess)
        except (ValidationError, GameOverError) as e:
            return jsonify({"success": False, "error": str(e)}), 400

        save_game(game, turn.to_dict())
        return jsonify({
            "success": True,
            **turn.to_dict(),
            "message": WIN_MESSAGE if turn.won else None,
            "target": game.secret if turn.over else None,
        })

    @app.route("/api/state")
    def get_state():
        """Current round as JSON."""
        return jsonify(state_payload(load_game()))

    @app.route("/stats")
    def get_stats():
        """Won/lost tally for this browser session."""
        game = load_game()
        tally = game.tally if game else Tally()
        return jsonify({
            "games_won": tally.won,
            "games_lost": tally.lost,
            "total_games": tally.total_games,
            "win_rate": round(tally.win_rate, 1),
        })


if __name__ == "__main__":
    setup_logging()
    app = create_app()
    port = int(os.environ.get("PORT", 5000))
    app.run(host="127.0.0.1", port=port, debug=False)
