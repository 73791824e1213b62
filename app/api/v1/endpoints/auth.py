"""Authentication endpoints."""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from app.core.app_exceptions import raise_app_error
from app.core.dependencies import CurrentUser
from app.core.logging import get_logger
from app.core.security import create_access_token, verify_password
from app.db.session import get_db
from app.models.user import User
from app.schemas.auth import LoginRequest, LoginResponse, MeResponse, UserResponse

logger = get_logger(__name__)

router = APIRouter(tags=["Auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Log in",
    description="Authenticate with email and password. Returns the user and a bearer token.",
)
def login(
    request_data: LoginRequest,
    request: Request,
    db: Session = Depends(get_db),
) -> LoginResponse:
    """Exchange credentials for an access token."""
    user = db.query(User).filter(User.email == request_data.email).first()

    if not user or not verify_password(request_data.password, user.password_hash):
        logger.warning(
            "Login failed",
            extra={"event": "auth_login_failed", "request_id": getattr(request.state, "request_id", None)},
        )
        raise_app_error(
            status_code=status.HTTP_401_UNAUTHORIZED,
            code="UNAUTHORIZED",
            message="Invalid email or password",
        )

    if not user.is_active:
        raise_app_error(
            status_code=status.HTTP_403_FORBIDDEN,
            code="ACCOUNT_INACTIVE",
            message="User account is inactive",
        )

    logger.info("Login succeeded", extra={"event": "auth_login", "user_id": str(user.id)})
    return LoginResponse(
        user=UserResponse.model_validate(user),
        token=create_access_token(str(user.id), user.role),
    )


@router.get(
    "/me",
    response_model=MeResponse,
    summary="Current user",
    description="Return the user behind the bearer token.",
)
def get_current_user_profile(current_user: CurrentUser) -> MeResponse:
    return MeResponse(user=UserResponse.model_validate(current_user))
