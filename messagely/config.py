from datetime import timedelta
from dotenv import load_dotenv
import os

load_dotenv()


def _token_lifetime():
    seconds = int(os.getenv('JWT_ACCESS_TOKEN_EXPIRES', 86400))
    if seconds <= 0:
        return False
    return timedelta(seconds=seconds)


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///messagely.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'super-secret')
    JWT_ACCESS_TOKEN_EXPIRES = _token_lifetime()
    # tokens are accepted from the Authorization header or a "token" key in the JSON body
    JWT_TOKEN_LOCATION = ['headers', 'json']
    JWT_JSON_KEY = 'token'

    # PBKDF2 iteration count handed to werkzeug when hashing passwords
    PASSWORD_WORK_FACTOR = int(os.getenv('PASSWORD_WORK_FACTOR', 600000))

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    JWT_SECRET_KEY = 'test-secret'
    JWT_ACCESS_TOKEN_EXPIRES = False
    PASSWORD_WORK_FACTOR = 1000
    LOG_LEVEL = 'DEBUG'
