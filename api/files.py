import os

from flask import Blueprint, current_app, send_from_directory

from .metrics import get_hit_counter

bp = Blueprint("files", __name__)


def _serve(filename: str):
    get_hit_counter(current_app).increment()
    root = os.path.abspath(current_app.config["FILESERVER_ROOT"])
    return send_from_directory(root, filename)


@bp.get("/")
def index():
    """
    Site index; counts as a hit
    ---
    tags: [Files]
    responses:
      200: { description: index.html }
    """
    return _serve("index.html")


@bp.get("/<path:filename>")
def serve(filename: str):
    """
    Static files; every request counts as a hit
    ---
    tags: [Files]
    responses:
      200: { description: File contents }
      404: { description: Not found }
    """
    return _serve(filename)
