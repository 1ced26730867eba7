import logging

from flask import Blueprint, current_app

from models import storage
from utils.decorators import platform_required
from .metrics import get_hit_counter

logger = logging.getLogger(__name__)

bp = Blueprint("admin", __name__)

METRICS_PAGE = """
<html>
  <body>
    <h1>Welcome, Chirpy Admin</h1>
    <p>Chirpy has been visited {hits} times!</p>
  </body>
</html>"""


@bp.get("/metrics")
def metrics():
    """
    File server hit count
    ---
    tags: [Admin]
    produces:
      - text/html
    responses:
      200: { description: HTML page with the hit count }
    """
    hits = get_hit_counter(current_app).value
    return METRICS_PAGE.format(hits=hits), 200, {"Content-Type": "text/html; charset=utf-8"}


@bp.post("/reset")
@platform_required("dev")
def reset():
    """
    Dev only: reset the hit counter and delete every user
    ---
    tags: [Admin]
    responses:
      200: { description: Reset }
      403: { description: Not on the dev platform }
    """
    get_hit_counter(current_app).reset()
    deleted = storage.delete_all_users()
    logger.info("reset: hit counter cleared, %d users deleted", deleted)
    return "OK", 200, {"Content-Type": "text/plain; charset=utf-8"}
