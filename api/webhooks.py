from __future__ import annotations

import logging

from flask import Blueprint, abort

from models import storage
from models.user import User
from models.schemas.webhook import PolkaEventSchema, PolkaUpgradeDataSchema, USER_UPGRADED
from utils.decorators import api_key_required
from api.utils.request_body import json_body

logger = logging.getLogger(__name__)

bp = Blueprint("webhooks", __name__)

polka_event_schema = PolkaEventSchema()
polka_upgrade_data_schema = PolkaUpgradeDataSchema()


@bp.post("/polka/webhooks")
@api_key_required("POLKA_KEY")
def polka_webhook():
    """
    Polka payment events. Only user.upgraded does anything; other events are
    acknowledged so Polka stops redelivering them.
    ---
    tags: [Webhooks]
    security:
      - ApiKey: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            event: { type: string, example: user.upgraded }
            data:
              type: object
              properties:
                user_id: { type: string }
    responses:
      204: { description: Acknowledged }
      400: { description: Invalid input }
      401: { description: Bad or missing API key }
      404: { description: User not found }
    """
    event = polka_event_schema.load(json_body())
    if event["event"] != USER_UPGRADED:
        logger.info("ignoring polka event %r", event["event"])
        return ("", 204)

    data = polka_upgrade_data_schema.load(event["data"] or {})
    user_id = str(data["user_id"])
    user = storage.get(User, user_id)
    if not user:
        logger.warning("polka upgrade for unknown user %s", user_id)
        abort(404, description="user not found")
    if not user.is_chirpy_red:
        user.is_chirpy_red = True
        user.save()
    logger.info("user %s upgraded to chirpy red", user.id)
    return ("", 204)
