from flask import jsonify, current_app
from messagely.errors import UnauthorizedError
from messagely.models import User
from messagely.security import issue_token
import logging

from . import auth_bp, json_body

logger = logging.getLogger(__name__)


@auth_bp.route('/login', methods=['POST'])
def login():
    """POST /login - {username, password} => {token}"""
    data = json_body()
    username = data.get('username')

    if not User.authenticate(username, data.get('password')):
        logger.info("Failed login for %s", username)
        raise UnauthorizedError("Invalid username or password")

    User.update_login_timestamp(username)
    logger.info("User %s logged in", username)
    return jsonify({"token": issue_token(username)}), 200


@auth_bp.route('/register', methods=['POST'])
def register():
    """POST /register - {username, password, first_name, last_name, phone} => {token}

    The new user is logged in right away.
    """
    data = json_body()
    user = User.register(
        username=data.get('username'),
        password=data.get('password'),
        first_name=data.get('first_name'),
        last_name=data.get('last_name'),
        phone=data.get('phone'),
        work_factor=current_app.config['PASSWORD_WORK_FACTOR'],
    )
    return jsonify({"token": issue_token(user['username'])}), 201
