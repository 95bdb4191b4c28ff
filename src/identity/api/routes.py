"""FastAPI endpoints for the Identity domain."""

from fastapi import APIRouter, Depends, Header
from protean.utils.globals import current_domain

from identity import accounts
from identity.accounts import AccountService, EndSession
from identity.api.dependencies import bearer_token, require_user
from identity.api.schemas import LoginRequest, SessionResponse, SignupRequest, StatusResponse, UserResponse
from identity.user.user import User
from shared.api import require_admin

router = APIRouter(prefix="/auth", tags=["auth"])
admin_router = APIRouter(prefix="/admin/users", tags=["admin"], dependencies=[Depends(require_admin)])


def _user_response(user: User) -> UserResponse:
    return UserResponse(id=user.id, name=user.name, email=user.email, created_at=user.created_at)


@router.post("/signup", status_code=201, response_model=SessionResponse)
async def signup(body: SignupRequest) -> SessionResponse:
    user, session = AccountService().signup(email=body.email, password=body.password, name=body.name)
    return SessionResponse(token=session.id, user=_user_response(user))


@router.post("/login", response_model=SessionResponse)
async def login(body: LoginRequest) -> SessionResponse:
    user, session = AccountService().login(email=body.email, password=body.password)
    return SessionResponse(token=session.id, user=_user_response(user))


@router.post("/logout", response_model=StatusResponse)
async def logout(authorization: str | None = Header(None)) -> StatusResponse:
    token = bearer_token(authorization)
    if token:
        current_domain.process(EndSession(token=token), asynchronous=False)
    return StatusResponse()


@router.get("/me", response_model=UserResponse)
async def me(user: User = Depends(require_user)) -> UserResponse:
    return _user_response(user)


@admin_router.get("", response_model=list[UserResponse])
async def list_users() -> list[UserResponse]:
    return [_user_response(user) for user in accounts.list_users()]
