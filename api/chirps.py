from __future__ import annotations

import logging

from flask import Blueprint, request, jsonify, g, abort, current_app
from marshmallow import ValidationError

from models import storage
from models.chirp import Chirp
from models.schemas.chirp import ChirpCreateSchema, ChirpOutSchema
from models.schemas.common import normalize_uuid
from utils.decorators import jwt_required
from utils.moderation import clean_body
from api.utils.request_body import json_body

logger = logging.getLogger(__name__)

bp = Blueprint("chirps", __name__)

chirp_create_schema = ChirpCreateSchema()
chirp_out_schema = ChirpOutSchema()
chirps_out_schema = ChirpOutSchema(many=True)


def parse_id(raw: str, label: str = "ID") -> str:
    try:
        return normalize_uuid(raw)
    except ValidationError:
        abort(400, description=f"invalid {label}")


def parse_sort():
    sort = request.args.get("sort", "asc").lower()
    if sort not in ("asc", "desc"):
        abort(400, description="Unsupported sort. Allowed: asc, desc")
    col = Chirp.created_at
    return (col.desc(), Chirp.id.desc()) if sort == "desc" else (col.asc(), Chirp.id.asc())


@bp.post("/chirps")
@jwt_required()
def create_chirp():
    """
    Create a chirp for the current user
    ---
    tags: [Chirps]
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            body: { type: string, maxLength: 140 }
    responses:
      201: { description: Created }
      400: { description: Invalid input or chirp too long }
      401: { description: Unauthorized }
    """
    data = chirp_create_schema.load(json_body())
    if len(data["body"]) > current_app.config["CHIRP_MAX_LENGTH"]:
        abort(400, description="Chirp is too long")

    chirp = Chirp(body=clean_body(data["body"]), user_id=g.current_user_id)
    storage.new(chirp)
    storage.save()
    return jsonify(chirp_out_schema.dump(chirp)), 201


@bp.get("/chirps")
def list_chirps():
    """
    List chirps, oldest first unless sort=desc
    ---
    tags: [Chirps]
    parameters:
      - in: query
        name: author_id
        type: string
      - in: query
        name: sort
        type: string
        default: asc
        description: "Allowed: asc or desc (by created_at)"
    responses:
      200: { description: OK }
      400: { description: Invalid author_id or sort }
    """
    session = storage.get_session()
    order_by = parse_sort()
    query = session.query(Chirp)

    author_id = request.args.get("author_id")
    if author_id:
        query = query.filter(Chirp.user_id == parse_id(author_id, "author ID"))

    rows = query.order_by(*order_by).all()
    return jsonify(chirps_out_schema.dump(rows)), 200


@bp.get("/chirps/<chirp_id>")
def get_chirp(chirp_id: str):
    """
    Get a chirp by id
    ---
    tags: [Chirps]
    parameters:
      - in: path
        name: chirp_id
        type: string
        required: true
    responses:
      200: { description: OK }
      400: { description: Invalid id }
      404: { description: Not found }
    """
    chirp = storage.get(Chirp, parse_id(chirp_id))
    if not chirp:
        abort(404, description="chirp not found")
    return jsonify(chirp_out_schema.dump(chirp)), 200


@bp.delete("/chirps/<chirp_id>")
@jwt_required()
def delete_chirp(chirp_id: str):
    """
    Delete one of your own chirps
    ---
    tags: [Chirps]
    security:
      - Bearer: []
    parameters:
      - in: path
        name: chirp_id
        type: string
        required: true
    responses:
      204: { description: Deleted }
      400: { description: Invalid id }
      401: { description: Unauthorized }
      403: { description: Not the author }
      404: { description: Not found }
    """
    chirp = storage.get(Chirp, parse_id(chirp_id))
    if not chirp:
        abort(404, description="chirp not found")
    if chirp.user_id != g.current_user_id:
        logger.warning("user %s tried to delete chirp %s owned by %s", g.current_user_id, chirp.id, chirp.user_id)
        abort(403, description="this user is not the author of the chirp")
    chirp.delete()
    storage.save()
    return ("", 204)
