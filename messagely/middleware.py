"""Middleware for handling request authorization for routes."""
from functools import wraps
from flask import g, request
from flask_jwt_extended import verify_jwt_in_request, get_jwt
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from messagely.errors import UnauthorizedError
from messagely.models import Message
from messagely.security import TokenClaims
import logging

logger = logging.getLogger(__name__)


def authenticate_jwt():
    """Attach the token's claims to ``g.user``, or None when there is no valid token.

    Never rejects the request; the ``ensure_*`` guards decide that.
    """
    g.user = None
    locations = None
    # only a JSON object can carry a "token" key
    if request.is_json and not isinstance(request.get_json(silent=True), dict):
        locations = ['headers']
    try:
        if verify_jwt_in_request(optional=True, locations=locations) is None:
            return
        g.user = TokenClaims.from_payload(get_jwt())
    except (JWTExtendedException, PyJWTError) as e:
        logger.debug("Ignoring invalid token on %s %s: %s", request.method, request.path, e)


def current_user():
    return g.get('user')


def _reject(reason, message='Unauthorized'):
    user = current_user()
    logger.debug("Rejected %s %s for %s: %s", request.method, request.path,
                 user.username if user else None, reason)
    raise UnauthorizedError(message)


def ensure_logged_in(fn):
    """Requires the user is authenticated."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        if current_user() is None:
            _reject("not logged in")
        return fn(*args, **kwargs)
    return wrapper


def ensure_correct_user(fn):
    """Requires the route's ``username`` to be the logged-in user."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        user = current_user()
        if user is None or user.username != kwargs.get('username'):
            _reject("wrong user")
        return fn(*args, **kwargs)
    return wrapper


def ensure_intended_recipient(fn):
    """Requires the logged-in user to be the recipient of message ``id``."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        user = current_user()
        if user is None:
            _reject("not logged in")
        _, to_username = Message.participants(kwargs['id'])
        if user.username != to_username:
            _reject("not recipient", 'Not intended recipient')
        return fn(*args, **kwargs)
    return wrapper


def ensure_message_participant(fn):
    """Requires the logged-in user to be the sender or recipient of message ``id``."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        user = current_user()
        if user is None:
            _reject("not logged in")
        if user.username not in Message.participants(kwargs['id']):
            _reject("not a participant", "You don't have access to this message")
        return fn(*args, **kwargs)
    return wrapper
