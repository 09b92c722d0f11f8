from flask import Blueprint, request
from messagely.errors import BadRequestError

auth_bp = Blueprint('auth', __name__)
users_bp = Blueprint('users', __name__)
messages_bp = Blueprint('messages', __name__)


def json_body():
    """The request's JSON object, or {} when there is no body."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise BadRequestError("Request body must be a JSON object")
    return data


from .auth import *
from .users import *
from .messages import *
