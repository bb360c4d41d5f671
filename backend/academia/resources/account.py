"""Account endpoints: registration, login and the current user."""

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from .. import models, repositories, services
from ..auth import get_current_user
from ..database import get_session
from ..errors import BadRequestAlertError
from ..schemas import AccountOut, LoginIn, RegisterIn, TokenOut

router = APIRouter(tags=["account"])


def _account(user: models.User) -> AccountOut:
    return AccountOut(
        id=user.id,
        login=user.login,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        activated=user.activated,
        authorities=sorted(a.name for a in user.authorities),
    )


@router.post('/register', status_code=201, response_model=AccountOut)
def register(payload: RegisterIn, db: Session = Depends(get_session)):
    """Register a new account with the `ROLE_USER` authority."""
    if repositories.UserRepository(db).get_by_login(payload.login.lower()):
        raise BadRequestAlertError("Login name already used!", "userManagement", "userexists")
    user = services.AuthService(db).register(
        payload.login,
        payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
    )
    return _account(user)


@router.post('/authenticate', response_model=TokenOut)
def authenticate(payload: LoginIn, db: Session = Depends(get_session)):
    """Authenticate a user and return a signed JWT.

    The token carries `user_id`, the login as `sub` and the granted
    authorities.
    """
    token = services.AuthService(db).authenticate(payload.username, payload.password)
    if not token:
        raise HTTPException(status_code=401, detail='invalid credentials')
    return TokenOut(id_token=token)


@router.get('/account', response_model=AccountOut)
def get_account(user: models.User = Depends(get_current_user)):
    return _account(user)
