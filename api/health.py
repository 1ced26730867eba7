from flask import Blueprint

bp = Blueprint("health", __name__)


@bp.get("/healthz")
def healthz():
    """
    Health check
    ---
    tags:
      - Health
    produces:
      - text/plain
    responses:
      200:
        description: API is up
    """
    return "OK", 200, {"Content-Type": "text/plain; charset=utf-8"}
