"""
Identity API endpoints with JWT authentication.

Provides register, login and current-user endpoints. Tokens are returned in
the response body and sent back by clients as `Authorization: Bearer <token>`.
"""
from django.http import HttpRequest
from ninja import Router
from ninja.errors import HttpError
from ninja.responses import codes_4xx

from apps.core.responses import ErrorResponse, to_response
from . import services
from .dtos import AuthResponse, LoginRequest, RegisterRequest, UserInfo
from .jwt_auth import extract_bearer_token, get_user_id_from_token

router = Router(tags=["Auth"])


# =============================================================================
# Helper Functions
# =============================================================================

def get_current_user_id(request: HttpRequest):
    """
    Resolve the user id from the bearer token.

    Returns the user id if the token is valid, None otherwise.
    """
    token = extract_bearer_token(request)
    if not token:
        return None
    return get_user_id_from_token(token)


def require_auth(request: HttpRequest) -> int:
    """
    Require authentication. Raises 401 if not authenticated.
    """
    user_id = get_current_user_id(request)
    if user_id is None:
        raise HttpError(401, "Authentication required")
    return user_id


# =============================================================================
# Auth Endpoints
# =============================================================================

@router.post("/register", response={201: AuthResponse, codes_4xx: ErrorResponse}, auth=None)
def register(request: HttpRequest, payload: RegisterRequest):
    """
    Register a new user and return an access token.
    """
    return to_response(request, services.register(payload), success_status=201)


@router.post("/login", response={200: AuthResponse, codes_4xx: ErrorResponse}, auth=None)
def login(request: HttpRequest, payload: LoginRequest):
    """
    Authenticate with email and password and return an access token.
    """
    return to_response(request, services.login(payload))


@router.get("/me", response={200: UserInfo, codes_4xx: ErrorResponse}, auth=None)
def get_me(request: HttpRequest):
    """
    Get the current authenticated user's profile.
    """
    user_id = require_auth(request)
    return to_response(request, services.get_current_user(user_id))
