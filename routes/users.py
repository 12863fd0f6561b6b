"""
Account routes.

Handles:
- /api/auth/register - Create an account with username/password
- /api/auth/login - Password sign-in
- /api/auth/firebase-auth - Sign in through the identity provider
- /api/users/<id> - Fetch or update a profile
"""

from flask import Blueprint

from routes.helpers import (
    api_response,
    json_body,
    require,
    sanitize_text,
    service,
)
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

users_bp = Blueprint("users", __name__)

MAX_NAME_LENGTH = 100


@users_bp.route("/api/auth/register", methods=["POST"])
def register():
    data = json_body()
    user = service("USER_SERVICE").register(
        username=sanitize_text(require(data, "username"), MAX_NAME_LENGTH),
        email=sanitize_text(require(data, "email"), MAX_NAME_LENGTH),
        password=str(require(data, "password")),
        name=sanitize_text(data.get("name"), MAX_NAME_LENGTH) or None,
    )
    return api_response(user.to_dict(), 201)


@users_bp.route("/api/auth/login", methods=["POST"])
def login():
    """Body: username (or email) and password."""
    data = json_body()
    user = service("USER_SERVICE").authenticate(
        login=sanitize_text(require(data, "username"), MAX_NAME_LENGTH),
        password=str(require(data, "password")),
    )
    return api_response(user.to_dict())


@users_bp.route("/api/auth/firebase-auth", methods=["POST"])
def firebase_auth():
    """Link or create the account behind an identity-provider uid."""
    data = json_body()
    user = service("USER_SERVICE").authenticate_external(
        uid=sanitize_text(require(data, "uid"), MAX_NAME_LENGTH),
        email=sanitize_text(require(data, "email"), MAX_NAME_LENGTH),
        display_name=sanitize_text(data.get("displayName"), MAX_NAME_LENGTH) or None,
    )
    return api_response(user.to_dict())


@users_bp.route("/api/users/<int:user_id>", methods=["GET"])
def get_user(user_id: int):
    return api_response(service("USER_SERVICE").get(user_id).to_dict())


@users_bp.route("/api/users/<int:user_id>", methods=["PUT"])
def update_user(user_id: int):
    """Only the display name and the plan can change."""
    data = json_body()
    name = sanitize_text(data["name"], MAX_NAME_LENGTH) if "name" in data else None
    plan = sanitize_text(data["plan"], MAX_NAME_LENGTH).lower() if "plan" in data else None
    user = service("USER_SERVICE").update_profile(user_id, name=name, plan=plan)
    return api_response(user.to_dict())
