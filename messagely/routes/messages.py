from flask import jsonify
from messagely.errors import UnauthorizedError
from messagely.middleware import (
    current_user,
    ensure_logged_in,
    ensure_intended_recipient,
    ensure_message_participant,
)
from messagely.models import Message

from . import messages_bp, json_body


@messages_bp.route('/<int:id>', methods=['GET'])
@ensure_logged_in
@ensure_message_participant
def message_detail(id):
    """GET /messages/<id> => {message: {id, body, sent_at, read_at, from_user, to_user}}

    Only the sender or the recipient may see a message.
    """
    return jsonify({"message": Message.get(id)}), 200


@messages_bp.route('', methods=['POST'])
@ensure_logged_in
def send_message():
    """POST /messages - {to_username, body} => {newMessage: {id, from_username, to_username, body, sent_at}}"""
    data = json_body()
    sender = current_user().username
    from_username = data.get('from_username')
    if from_username is None:
        from_username = sender
    if from_username != sender:
        raise UnauthorizedError("Cannot send messages as another user")

    new_message = Message.create(
        from_username=from_username,
        to_username=data.get('to_username'),
        body=data.get('body'),
    )
    return jsonify({"newMessage": new_message}), 201


@messages_bp.route('/<int:id>/read', methods=['POST'])
@ensure_logged_in
@ensure_intended_recipient
def mark_read(id):
    """POST /messages/<id>/read => {readMessage: {id, read_at}}"""
    return jsonify({"readMessage": Message.mark_read(id)}), 200
