"""
Services for Identity app.

Registration, login and current-user lookup. Every function returns a
Result; expected failures (duplicate email, bad credentials, missing user)
are errors, not exceptions.
"""
import logging
from typing import Optional

from apps.core.repositories import UnitOfWork
from apps.core.results import DomainErrors, Error, Result
from .dtos import AuthResponse, LoginRequest, RegisterRequest, UserInfo
from .jwt_auth import create_access_token, get_jwt_settings
from .models import User
from .security import hash_password, verify_password

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def to_user_info(user: User) -> UserInfo:
    return UserInfo(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
    )


def _auth_response(user: User) -> AuthResponse:
    jwt_settings = get_jwt_settings()
    return AuthResponse(
        access_token=create_access_token(user.id, user.email, jwt_settings),
        expires_in=jwt_settings.expires_in_seconds,
        user=to_user_info(user),
    )


def register(payload: RegisterRequest, uow: Optional[UnitOfWork] = None) -> Result[AuthResponse]:
    uow = uow or UnitOfWork()
    email = normalize_email(payload.email)

    if uow.users.exists(email=email):
        logger.warning("Registration attempted with existing email: %s", email)
        return Result.failure(DomainErrors.User.EMAIL_ALREADY_EXISTS)

    user = uow.users.add(User(
        email=email,
        password_hash=hash_password(payload.password),
        first_name=payload.first_name,
        last_name=payload.last_name,
    ))

    logger.info("New user registered: %s (ID: %s)", user.email, user.id)
    return Result.success(_auth_response(user))


def login(payload: LoginRequest, uow: Optional[UnitOfWork] = None) -> Result[AuthResponse]:
    uow = uow or UnitOfWork()
    email = normalize_email(payload.email)

    matches = uow.users.find(email=email)
    user = matches[0] if matches else None

    if user is None:
        logger.warning("Login attempted for non-existent email: %s", email)
        return Result.failure(DomainErrors.User.INVALID_CREDENTIALS)

    if not verify_password(payload.password, user.password_hash):
        logger.warning("Invalid password attempt for user: %s", email)
        return Result.failure(DomainErrors.User.INVALID_CREDENTIALS)

    logger.info("User logged in: %s (ID: %s)", user.email, user.id)
    return Result.success(_auth_response(user))


def get_current_user(user_id: int, uow: Optional[UnitOfWork] = None) -> Result[UserInfo]:
    uow = uow or UnitOfWork()
    user = uow.users.get_by_id(user_id)

    if user is None:
        logger.warning("Current user requested for non-existent user ID: %s", user_id)
        return Result.failure(Error.not_found("User", user_id))

    return Result.success(to_user_info(user))
