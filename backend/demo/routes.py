"""
Demo routes - every handler goes through EndpointBinder.
"""

from flask import Blueprint

from binding.endpoints import (
    BaseShape,
    EndpointBinder,
    error_result,
    json_result,
)
from .user_manager import UNAUTHORIZED, UserManager


api_bp = Blueprint('api', __name__)

user_manager = UserManager()


def current_user(request, response):
    """Service: the logged-in user (401 when there is none)."""
    return user_manager.get_user(request)


binder = EndpointBinder({"user": current_user})


class IdRequired(BaseShape):
    id: int


# Note: NOT identical to User - the password hash is left out.
class UserResponse(BaseShape):
    id: int
    username: str


class IsMeResponse(BaseShape):
    isme: bool
    user: UserResponse


class LoginBody(BaseShape):
    username: str
    password: str


class PingResponse(BaseShape):
    status: str


@api_bp.route("/ping", methods=["GET"])
@binder.endpoint(output=PingResponse)
def ping(ctx):
    return {"status": "ok"}


@api_bp.route("/isme/<id>", methods=["GET"])
@binder.endpoint(params=IdRequired, output=IsMeResponse)
def isme(ctx):
    user = ctx.services["user"]
    return {"user": user, "isme": ctx.params.id == user.id}


@api_bp.route("/login", methods=["POST"])
@binder.endpoint(body=LoginBody)
def login(ctx):
    cookies = user_manager.login(ctx.body.username, ctx.body.password)
    if cookies:
        return json_result({}, cookies=cookies)
    return error_result(UNAUTHORIZED, "username/password not found")


@api_bp.route("/logout", methods=["POST"])
@binder.endpoint
def logout(ctx):
    return json_result({}, cookies=user_manager.logout())
