from __future__ import annotations

import logging

from flask import Blueprint, jsonify, g, abort

from models import storage
from models.user import User
from models.schemas.user import UserCreateSchema, UserUpdateSchema, UserOutSchema
from utils.decorators import jwt_required
from utils.security import hash_password, PasswordHashError
from api.utils.request_body import json_body

logger = logging.getLogger(__name__)

bp = Blueprint("users", __name__)

user_create_schema = UserCreateSchema()
user_update_schema = UserUpdateSchema()
user_out_schema = UserOutSchema()


def _email_taken(email: str, exclude_id: str | None = None) -> bool:
    query = storage.get_session().query(User).filter(User.email == email)
    if exclude_id:
        query = query.filter(User.id != exclude_id)
    return query.first() is not None


def _hash_or_500(password: str) -> str:
    try:
        return hash_password(password)
    except PasswordHashError:
        logger.exception("password hashing failed")
        abort(500, description="Failed to hash password")


@bp.post("/users")
def create_user():
    """
    Create a user
    ---
    tags:
      - Users
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            email: { type: string }
            password: { type: string }
    responses:
      201:
        description: Created
      400:
        description: Invalid input or email already registered
    """
    data = user_create_schema.load(json_body())
    if _email_taken(data["email"]):
        abort(400, description="Email already registered")

    user = User(email=data["email"], hashed_password=_hash_or_500(data["password"]))
    storage.new(user)
    storage.save()
    logger.info("created user %s", user.id)
    return jsonify(user_out_schema.dump(user)), 201


@bp.put("/users")
@jwt_required()
def update_user():
    """
    Replace the current user's email and password
    ---
    tags:
      - Users
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            email: { type: string }
            password: { type: string }
    responses:
      200:
        description: OK
      400:
        description: Invalid input
      401:
        description: Unauthorized
    """
    data = user_update_schema.load(json_body())
    user: User = g.current_user
    if _email_taken(data["email"], exclude_id=user.id):
        abort(400, description="Email already registered")

    user.email = data["email"]
    user.hashed_password = _hash_or_500(data["password"])
    user.save()
    logger.info("updated user %s", user.id)
    return jsonify(user_out_schema.dump(user)), 200
