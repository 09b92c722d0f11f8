from messagely import db
from messagely.errors import NotFoundError
from messagely.models.user import User, utcnow, isoformat, require_text
import logging

logger = logging.getLogger(__name__)


class Message(db.Model):
    """Message sent from one user to another."""

    __tablename__ = 'messages'

    id = db.Column(db.Integer, primary_key=True)
    from_username = db.Column(db.String(80), db.ForeignKey('users.username'), nullable=False)
    to_username = db.Column(db.String(80), db.ForeignKey('users.username'), nullable=False)
    body = db.Column(db.Text, nullable=False)
    sent_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    read_at = db.Column(db.DateTime(timezone=True), nullable=True)

    from_user = db.relationship(User, foreign_keys=[from_username])
    to_user = db.relationship(User, foreign_keys=[to_username])

    @classmethod
    def _lookup(cls, id):
        message = db.session.get(cls, id)
        if message is None:
            raise NotFoundError(f"No such message: {id}")
        return message

    @classmethod
    def participants(cls, id):
        """Return (from_username, to_username) for a message."""
        message = cls._lookup(id)
        return message.from_username, message.to_username

    @classmethod
    def create(cls, from_username=None, to_username=None, body=None):
        """Send a message.

        Returns {id, from_username, to_username, body, sent_at}
        """
        require_text(from_username=from_username, to_username=to_username, body=body)
        for username in (from_username, to_username):
            if db.session.get(User, username) is None:
                raise NotFoundError(f"Username of '{username}' not found")

        message = cls(
            from_username=from_username,
            to_username=to_username,
            body=body,
            sent_at=utcnow(),
        )
        db.session.add(message)
        db.session.commit()
        logger.info("Message %s sent from %s to %s", message.id, from_username, to_username)

        return {
            'id': message.id,
            'from_username': message.from_username,
            'to_username': message.to_username,
            'body': message.body,
            'sent_at': isoformat(message.sent_at),
        }

    @classmethod
    def mark_read(cls, id):
        """Mark a message as read: returns {id, read_at}."""
        message = cls._lookup(id)
        if message.read_at is None:
            message.read_at = utcnow()
            db.session.commit()
            logger.info("Message %s read by %s", message.id, message.to_username)
        return {'id': message.id, 'read_at': isoformat(message.read_at)}

    @classmethod
    def get(cls, id):
        """Get a message by id.

        Returns {id, body, sent_at, read_at, from_user, to_user} where both
        users are {username, first_name, last_name, phone}.
        """
        message = cls._lookup(id)
        return {
            'id': message.id,
            'body': message.body,
            'sent_at': isoformat(message.sent_at),
            'read_at': isoformat(message.read_at),
            'from_user': message.from_user.summary(),
            'to_user': message.to_user.summary(),
        }
