from dataclasses import dataclass
from flask_jwt_extended import create_access_token
from werkzeug.security import generate_password_hash, check_password_hash


def hash_password(password: str, work_factor: int) -> str:
    return generate_password_hash(password, method=f'pbkdf2:sha256:{work_factor}')


def check_password(hashed: str, password: str) -> bool:
    return check_password_hash(hashed, password)


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a bearer token."""

    username: str

    @classmethod
    def from_payload(cls, payload):
        username = payload.get('sub') if payload else None
        if not username:
            return None
        return cls(username=username)


def issue_token(username: str) -> str:
    """Sign a token for ``username`` with the app's JWT secret."""
    return create_access_token(identity=username)
