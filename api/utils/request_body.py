import logging

from flask import request, abort

logger = logging.getLogger(__name__)


def json_body() -> dict:
    """Parsed JSON object of the current request, or a 400."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        logger.info("rejected body on %s: not a JSON object", request.path)
        abort(400, description="Invalid JSON in the request body")
    return payload
