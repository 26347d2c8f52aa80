"""
Flask application factory for the demo app.

Bound endpoints handle their own validation errors and business results;
the middleware installed here covers correlation, usage logging and the
faults endpoints deliberately let through.
"""

import logging

from flask import Flask
from flask_cors import CORS

from config import Config


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    logging.basicConfig(level=app.config.get('LOG_LEVEL', 'INFO'))

    CORS(app,
         resources={r"/api/*": {"origins": "*"}},
         methods=["GET", "POST", "OPTIONS"],
         allow_headers=["Content-Type", "X-Request-ID"],
         expose_headers=["X-Request-ID"],
         supports_credentials=False)

    from binding.middleware import (
        setup_error_handlers,
        setup_request_id_middleware,
        setup_request_logging_middleware,
    )
    setup_request_id_middleware(app)
    setup_request_logging_middleware(app)
    setup_error_handlers(app)

    from demo import api_bp
    app.register_blueprint(api_bp, url_prefix='/api')

    return app


if __name__ == '__main__':
    create_app().run(port=3000)
