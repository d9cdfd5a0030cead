import logging
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel, ConfigDict, EmailStr

from database import USERS, get_db

logger = logging.getLogger(__name__)

router = APIRouter()

TOKEN_COOKIE = "token"
JWT_ALGORITHM = "HS256"


class TokenRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: EmailStr


def _cookie_options(settings) -> dict:
    if settings.is_production:
        return {"httponly": True, "secure": True, "samesite": "none"}
    return {"httponly": True, "secure": False, "samesite": "strict"}


def create_token(email: str, settings) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "email": email,
        "iat": now,
        "exp": now + timedelta(hours=settings.token_ttl_hours),
    }
    return jwt.encode(payload, settings.token_secret, algorithm=JWT_ALGORITHM)


def unauthorized():
    return HTTPException(status_code=401, detail="Unauthorized access")


# -------------------------------
# Token verification
# -------------------------------
async def verify_token(request: Request) -> dict:
    token = request.cookies.get(TOKEN_COOKIE)
    if not token:
        raise unauthorized()

    settings = request.app.state.settings
    try:
        claims = jwt.decode(token, settings.token_secret, algorithms=[JWT_ALGORITHM])
    except jwt.InvalidTokenError as e:
        logger.warning(f"Token verification failed on {request.url.path}: {e}")
        raise unauthorized()

    if not claims.get("email"):
        raise unauthorized()
    return claims


# -------------------------------
# Role gates
# -------------------------------
def require_role(role: str):
    async def gate(request: Request, db=Depends(get_db)):
        if not request.app.state.settings.auth_enabled:
            return None
        claims = await verify_token(request)
        user = await db[USERS].find_one({"email": claims["email"]})
        if not user or user.get("role") != role:
            raise unauthorized()
        return user

    gate.__name__ = f"verify_{role}"
    return gate


verify_admin = require_role("admin")
verify_seller = require_role("seller")
verify_buyer = require_role("buyer")


# -------------------------------
# POST /jwt – Issue token cookie
# -------------------------------
@router.post("/jwt")
async def issue_token(body: TokenRequest, request: Request, response: Response):
    settings = request.app.state.settings
    token = create_token(body.email, settings)
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        max_age=settings.token_ttl_hours * 3600,
        **_cookie_options(settings),
    )
    return {"success": True}


# -------------------------------
# GET /logout – Clear token cookie
# -------------------------------
@router.get("/logout")
async def logout(request: Request, response: Response):
    response.delete_cookie(TOKEN_COOKIE, **_cookie_options(request.app.state.settings))
    return {"success": True}
