import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key')
    JWT_SECRET = os.getenv('JWT_SECRET', os.getenv('SECRET_KEY', 'dev-jwt-secret-key'))
    JWT_ALGORITHM = os.getenv('JWT_ALGORITHM', 'HS256')
    JWT_EXPIRATION_HOURS = int(os.getenv('JWT_EXPIRATION_HOURS', '24'))

    # Cookie holding the signed user id for the demo app
    SESSION_COOKIE_NAME = os.getenv('SESSION_COOKIE_NAME', 'USERID')

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
    DEBUG = os.getenv('FLASK_DEBUG', 'False').lower() == 'true'
