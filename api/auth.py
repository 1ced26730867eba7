"""
Authentication blueprint:
- POST /api/login    -> user + access token + refresh token
- POST /api/refresh  -> new access token for a live refresh token
- POST /api/revoke   -> revoke a refresh token

The implementation:
- Uses argon2 for password hashing (via utils.security)
- Issues short-lived access tokens (JWT, HS256) and opaque refresh tokens
- Stores refresh tokens in the DB (RefreshToken model) so they can be revoked
- Refresh does not rotate the refresh token
"""
from __future__ import annotations

import logging

from flask import Blueprint, request, jsonify, abort, current_app

from models import storage
from models.user import User
from models.schemas.user import UserLoginSchema, UserOutSchema
from api.utils.request_body import json_body
from utils.refresh_tokens import (
    RefreshTokenNotFound,
    RefreshTokenRejected,
    issue_refresh_token,
    resolve_refresh_token,
    revoke_refresh_token,
)
from utils.security import (
    CredentialsExtractionError,
    PasswordHashError,
    TokenSigningError,
    burn_password_check,
    get_bearer_token,
    make_jwt,
    verify_password,
)

logger = logging.getLogger(__name__)

bp = Blueprint("auth", __name__)

user_login_schema = UserLoginSchema()
user_out_schema = UserOutSchema()

LOGIN_FAILED = "Incorrect email or password"
REFRESH_REJECTED = "Refresh token missing or invalid"


def _access_token_for(user_id: str) -> str:
    try:
        return make_jwt(
            user_id,
            current_app.config["JWT_SECRET"],
            current_app.config["ACCESS_TOKEN_EXPIRES"],
            algorithm=current_app.config["JWT_ALGORITHM"],
        )
    except TokenSigningError:
        logger.exception("could not sign access token for user %s", user_id)
        abort(500, description="Failed to create token")


def _bearer_or_401() -> str:
    try:
        return get_bearer_token(request.headers)
    except CredentialsExtractionError as e:
        logger.warning("bearer extraction failed on %s: %s", request.path, e)
        abort(401, description=REFRESH_REJECTED)


@bp.post("/login")
def login():
    """
    Login: returns the user with an access token and a refresh token
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             email: { type: string }
             password: { type: string }
    responses:
      200:
        description: OK (returns tokens)
      400:
        description: Invalid input
      401:
        description: Unauthorized
    """
    payload = user_login_schema.load(json_body())
    email = payload["email"]
    password = payload["password"]

    session = storage.get_session()
    user: User = session.query(User).filter(User.email == email).first()
    try:
        if user is None:
            # same cost as a real check so timing does not tell the two apart
            burn_password_check(password)
            logger.info("login failed: unknown email")
            abort(401, description=LOGIN_FAILED)
        if not verify_password(password, user.hashed_password):
            logger.info("login failed: wrong password for user %s", user.id)
            abort(401, description=LOGIN_FAILED)
    except PasswordHashError:
        logger.exception("password verification failed")
        abort(500, description="Failed to verify password")

    access_token = _access_token_for(user.id)
    refresh_token = issue_refresh_token(user.id, current_app.config["REFRESH_TOKEN_EXPIRES"])
    logger.info("user %s logged in", user.id)

    body = user_out_schema.dump(user)
    body["token"] = access_token
    body["refresh_token"] = refresh_token
    return jsonify(body), 200


@bp.post("/refresh")
def refresh():
    """
    Exchange a refresh token for a new access token
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: OK (returns a new access token)
      401:
        description: Refresh token missing, unknown, expired or revoked
    """
    token = _bearer_or_401()
    try:
        user_id = resolve_refresh_token(token)
    except RefreshTokenNotFound:
        logger.warning("refresh with unknown token")
        abort(401, description=REFRESH_REJECTED)
    except RefreshTokenRejected as e:
        logger.warning("refresh rejected: %s", e.reason)
        abort(401, description=REFRESH_REJECTED)

    return jsonify({"token": _access_token_for(user_id)}), 200


@bp.post("/revoke")
def revoke():
    """
    Revoke a refresh token
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      204:
        description: Revoked
      401:
        description: Refresh token missing or unknown
    """
    token = _bearer_or_401()
    try:
        rt = revoke_refresh_token(token)
    except RefreshTokenNotFound:
        logger.warning("revoke with unknown token")
        abort(401, description=REFRESH_REJECTED)
    logger.info("refresh token revoked for user %s", rt.user_id)
    return ("", 204)
