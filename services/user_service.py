"""
User accounts.

Passwords are hashed with werkzeug. Users signing in through the identity
provider are linked by its uid; a matching email links the existing
account instead of creating a second one.
"""

from __future__ import annotations

from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from models.user import User
from logging_config import get_logger


logger = get_logger(__name__)

PLANS = ("free", "basic", "pro", "business")


class UserService:
    def __init__(self, storage):
        self._storage = storage

    def register(self, username: str, email: str, password: str, name: Optional[str] = None) -> User:
        """
        Create an account.

        Raises:
            ValidationError: Missing username, email or password
            ConflictError: Username or email already taken
        """
        if not username:
            raise ValidationError("Username required", field="username")
        if not email or "@" not in email:
            raise ValidationError("Valid email required", field="email")
        if not password:
            raise ValidationError("Password required", field="password")

        email = email.strip().lower()
        with self._storage.transaction():
            if self._storage.get_user_by_username(username) is not None:
                raise ConflictError("Username already exists", {"username": username})
            if self._storage.get_user_by_email(email) is not None:
                raise ConflictError("Email already registered", {"email": email})
            user = self._storage.add_user(User(
                username=username,
                email=email,
                password_hash=generate_password_hash(password),
                name=name,
            ))

        logger.info(f"Registered user {user.id} ({user.username})")
        return user

    def check_password(self, user: User, password: str) -> bool:
        return bool(user.password_hash) and check_password_hash(user.password_hash, password)

    def authenticate(self, login: str, password: str) -> User:
        """
        Password sign-in by username or email.

        Raises:
            AuthorizationError: Unknown account or wrong password
        """
        if not login or not password:
            raise ValidationError("Username and password required")

        user = self._storage.get_user_by_username(login)
        if user is None:
            user = self._storage.get_user_by_email(login.strip().lower())
        if user is None or not self.check_password(user, password):
            logger.warning(f"Failed sign-in for '{login}'")
            raise AuthorizationError("Invalid username or password")
        return user

    def authenticate_external(self, uid: str, email: str, display_name: Optional[str] = None) -> User:
        """Find or create the user behind an identity-provider uid."""
        if not uid:
            raise ValidationError("Identity provider uid required", field="uid")
        if not email:
            raise ValidationError("Email required", field="email")

        email = email.strip().lower()
        with self._storage.transaction():
            user = self._storage.get_user_by_external_uid(uid)
            if user is not None:
                return user

            user = self._storage.get_user_by_email(email)
            if user is not None:
                user.external_uid = uid
                user = self._storage.save_user(user)
                logger.info(f"Linked identity provider account to user {user.id}")
                return user

            user = self._storage.add_user(User(
                username=self._free_username(email.split("@")[0]),
                email=email,
                name=display_name,
                external_uid=uid,
            ))

        logger.info(f"Created user {user.id} from identity provider sign-in")
        return user

    def get(self, user_id: int) -> User:
        user = self._storage.get_user(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def update_profile(self, user_id: int, name: Optional[str] = None, plan: Optional[str] = None) -> User:
        if plan is not None and plan not in PLANS:
            raise ValidationError(f"Unknown plan '{plan}'. Expected one of: {', '.join(PLANS)}", field="plan")

        with self._storage.transaction():
            user = self.get(user_id)
            if name is not None:
                user.name = name
            if plan is not None:
                user.plan = plan
            return self._storage.save_user(user)

    def _free_username(self, base: str) -> str:
        candidate = base or "user"
        suffix = 1
        while self._storage.get_user_by_username(candidate) is not None:
            suffix += 1
            candidate = f"{base}{suffix}"
        return candidate
