import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db import get_db
from app.dependencies.authz import Caller, get_current_user
from app.models.user import UserRole
from app.schemas.auth_schemas import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from app.utils import auth as auth_utils
from app.utils.exceptions import Forbidden, NotFound, ValidationFailed

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])

# admin and staff accounts are created by an admin, never self-registered
SELF_REGISTER_ROLES = frozenset({UserRole.user, UserRole.manager})

# module-level dependency to avoid calling Depends() inside function defaults
db_dependency = Depends(get_db)
current_user_dependency = Depends(get_current_user)


@router.post(
    "/register",
    summary="Register an account",
    description="Create an account and receive an access JWT.",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(request: RegisterRequest, db: Session = db_dependency):
    if request.role is not None and request.role not in SELF_REGISTER_ROLES:
        raise Forbidden(f"Cannot self-register with role {request.role.value}")
    if auth_utils.get_user_by_email(db, request.email):
        raise ValidationFailed("User already exists")

    kwargs = {"role": request.role} if request.role is not None else {}
    user = auth_utils.create_user(db, request.email, request.password, request.name, **kwargs)
    logger.info(f"Registered user {user.id} with role {user.role.value}")
    return TokenResponse(token=auth_utils.create_access_token(user), user=UserResponse.model_validate(user))


@router.post(
    "/login",
    summary="Login with email/password",
    description="Authenticate against the local user store and receive an access JWT.",
    response_model=TokenResponse,
)
def login(request: LoginRequest, db: Session = db_dependency):
    user = auth_utils.authenticate_user(db, request.email, request.password)
    if not user:
        raise ValidationFailed("Invalid credentials")
    return TokenResponse(token=auth_utils.create_access_token(user), user=UserResponse.model_validate(user))


@router.get(
    "/me",
    summary="Get current user",
    response_model=UserResponse,
)
def me(caller: Caller = current_user_dependency, db: Session = db_dependency):
    user = auth_utils.get_user_by_id(db, caller.id)
    if not user:
        raise NotFound("User not found")
    return UserResponse.model_validate(user)
