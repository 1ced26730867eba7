from __future__ import annotations

import hmac
import logging
from functools import wraps

from flask import request, g, abort, current_app

from models import storage
from models.user import User
from utils.security import (
    CredentialsExtractionError,
    InvalidTokenError,
    get_api_key,
    get_bearer_token,
    validate_jwt,
)

logger = logging.getLogger(__name__)

TOKEN_REJECTED = "Token missing or invalid"
API_KEY_REJECTED = "API key invalid"


def jwt_required():
    """
    Require a valid access token. Sets g.current_user and g.current_user_id.
    Every failure is a 401 with the same message; the reason only goes to the log.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                token = get_bearer_token(request.headers)
            except CredentialsExtractionError as e:
                logger.warning("bearer extraction failed on %s: %s", request.path, e)
                abort(401, description=TOKEN_REJECTED)
            try:
                user_id = validate_jwt(
                    token,
                    current_app.config["JWT_SECRET"],
                    algorithm=current_app.config["JWT_ALGORITHM"],
                )
            except InvalidTokenError as e:
                logger.warning("access token rejected on %s: %s", request.path, e)
                abort(401, description=TOKEN_REJECTED)

            user = storage.get(User, user_id)
            if not user:
                logger.warning("access token for unknown user %s on %s", user_id, request.path)
                abort(401, description=TOKEN_REJECTED)
            g.current_user = user
            g.current_user_id = user.id
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def api_key_required(config_key: str):
    """Require 'Authorization: ApiKey <key>' matching current_app.config[config_key]."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                key = get_api_key(request.headers)
            except CredentialsExtractionError as e:
                logger.warning("api key extraction failed on %s: %s", request.path, e)
                abort(401, description=API_KEY_REJECTED)
            expected = current_app.config.get(config_key) or ""
            # an unset key never matches
            if not expected or not hmac.compare_digest(key.encode(), expected.encode()):
                logger.warning("api key mismatch on %s", request.path)
                abort(401, description=API_KEY_REJECTED)
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def platform_required(platform: str):
    """
    Allow the endpoint only when PLATFORM matches. This is a deployment
    check, not a user check: no credentials are looked at.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            if current_app.config.get("PLATFORM") != platform:
                logger.warning("%s refused: platform is %r", request.path, current_app.config.get("PLATFORM"))
                abort(403, description=f"Only allowed on the {platform} platform")
            return fn(*args, **kwargs)

        return wrapper

    return decorator
