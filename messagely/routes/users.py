from flask import jsonify
from messagely.middleware import ensure_logged_in, ensure_correct_user
from messagely.models import User

from . import users_bp


@users_bp.route('', methods=['GET'])
@ensure_logged_in
def list_users():
    """GET /users => {users: [{username, first_name, last_name, phone}, ...]}"""
    return jsonify({"users": User.all()}), 200


@users_bp.route('/<username>', methods=['GET'])
@ensure_correct_user
def user_detail(username):
    """GET /users/<username> => {user: {username, first_name, last_name, phone, join_at, last_login_at}}"""
    return jsonify({"user": User.get(username)}), 200


@users_bp.route('/<username>/to', methods=['GET'])
@ensure_correct_user
def messages_to(username):
    return jsonify({"messages": User.messages_to(username)}), 200


@users_bp.route('/<username>/from', methods=['GET'])
@ensure_correct_user
def messages_from(username):
    return jsonify({"messages": User.messages_from(username)}), 200
