from messagely import db
from messagely.errors import BadRequestError, NotFoundError, UnauthorizedError
from messagely.security import hash_password, check_password
from datetime import datetime, timezone
from sqlalchemy.exc import IntegrityError
import logging

logger = logging.getLogger(__name__)


def utcnow():
    return datetime.now(timezone.utc)


def isoformat(value):
    if value is None:
        return None
    # SQLite hands back naive datetimes; everything is stored as UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def require_text(**fields):
    """Raise BadRequestError unless every field is a non-empty string."""
    missing = [name for name, value in fields.items() if value is None or value == '']
    if missing:
        raise BadRequestError(f"Missing required field(s): {', '.join(missing)}")
    invalid = [name for name, value in fields.items() if not isinstance(value, str)]
    if invalid:
        raise BadRequestError(f"Field(s) must be strings: {', '.join(invalid)}")


class User(db.Model):
    """User of the site."""

    __tablename__ = 'users'

    username = db.Column(db.String(80), primary_key=True)
    password = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(120), nullable=False)
    last_name = db.Column(db.String(120), nullable=False)
    phone = db.Column(db.String(20), nullable=False)
    join_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    last_login_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    def summary(self):
        return {
            'username': self.username,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'phone': self.phone,
        }

    @classmethod
    def register(cls, username=None, password=None, first_name=None, last_name=None, phone=None,
                 work_factor=None):
        """Register a new user.

        Returns {username, password, first_name, last_name, phone} where
        password is the stored hash.
        """
        require_text(
            username=username,
            password=password,
            first_name=first_name,
            last_name=last_name,
            phone=phone,
        )
        if work_factor is None:
            raise ValueError("work_factor is required")
        if db.session.get(cls, username) is not None:
            raise BadRequestError(f"Username '{username}' is already taken")

        now = utcnow()
        user = cls(
            username=username,
            password=hash_password(password, work_factor),
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            join_at=now,
            last_login_at=now,
        )
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise BadRequestError(f"Username '{username}' is already taken")

        logger.info("Registered user %s", username)
        result = user.summary()
        result['password'] = user.password
        return result

    @classmethod
    def authenticate(cls, username, password):
        """Is this username/password valid? Returns a boolean."""
        require_text(username=username, password=password)

        user = db.session.get(cls, username)
        if user is None:
            raise UnauthorizedError("Invalid username or password")
        return check_password(user.password, password)

    @classmethod
    def update_login_timestamp(cls, username):
        user = db.session.get(cls, username)
        if user is None:
            raise NotFoundError(f"Username of '{username}' not found")
        user.last_login_at = utcnow()
        db.session.commit()

    @classmethod
    def all(cls):
        """Basic info on all users: [{username, first_name, last_name, phone}, ...]"""
        users = db.session.execute(db.select(cls).order_by(cls.username)).scalars()
        return [user.summary() for user in users]

    @classmethod
    def get(cls, username):
        user = db.session.get(cls, username)
        if user is None:
            raise NotFoundError(f"Username of '{username}' not found")
        result = user.summary()
        result['join_at'] = isoformat(user.join_at)
        result['last_login_at'] = isoformat(user.last_login_at)
        return result

    @classmethod
    def messages_from(cls, username):
        """Messages sent by this user: [{id, to_user, body, sent_at, read_at}]"""
        from messagely.models.message import Message

        stmt = (
            db.select(Message)
            .where(Message.from_username == username)
            .order_by(Message.sent_at, Message.id)
        )
        return [
            {
                'id': msg.id,
                'to_user': msg.to_user.summary(),
                'body': msg.body,
                'sent_at': isoformat(msg.sent_at),
                'read_at': isoformat(msg.read_at),
            }
            for msg in db.session.execute(stmt).scalars()
        ]

    @classmethod
    def messages_to(cls, username):
        """Messages received by this user: [{id, from_user, body, sent_at, read_at}]"""
        from messagely.models.message import Message

        stmt = (
            db.select(Message)
            .where(Message.to_username == username)
            .order_by(Message.sent_at, Message.id)
        )
        return [
            {
                'id': msg.id,
                'from_user': msg.from_user.summary(),
                'body': msg.body,
                'sent_at': isoformat(msg.sent_at),
                'read_at': isoformat(msg.read_at),
            }
            for msg in db.session.execute(stmt).scalars()
        ]
