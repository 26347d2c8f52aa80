"""
Demonstration login app built on EndpointBinder.

Routes (blueprint mounted at /api):
- GET  /api/ping        - health check
- GET  /api/isme/<id>   - is the logged-in user this id? (password never sent)
- POST /api/login       - sets the session cookie
- POST /api/logout      - clears the session cookie
"""

from .routes import api_bp

__all__ = ['api_bp']
