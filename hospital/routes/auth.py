import hmac
import logging
from fastapi import APIRouter, HTTPException, Request, Response
from hospital import config
from hospital.schemas import LoginRequest


logger = logging.getLogger(__name__)

router = APIRouter()


def is_admin(request: Request) -> bool:
    return request.cookies.get(config.ADMIN_COOKIE_NAME) == "true"


def require_admin(request: Request):
    """Dependency guarding back-office endpoints."""
    if not is_admin(request):
        raise HTTPException(status_code=401, detail="Admin login required")


@router.post("/auth/login")
async def login(payload: LoginRequest, response: Response):
    email_ok = hmac.compare_digest(payload.email.encode(), config.ADMIN_LOGIN_EMAIL.encode())
    password_ok = hmac.compare_digest(payload.password.encode(), config.ADMIN_LOGIN_PASSWORD.encode())
    if not (email_ok and password_ok):
        logger.warning(f"Failed admin login for {payload.email}")
        raise HTTPException(status_code=401, detail="Invalid email or password")

    response.set_cookie(
        config.ADMIN_COOKIE_NAME,
        "true",
        httponly=True,
        path="/",
        max_age=config.ADMIN_SESSION_MAX_AGE,
    )
    return {"message": "Login successful"}


@router.post("/auth/logout")
async def logout(response: Response):
    response.delete_cookie(config.ADMIN_COOKIE_NAME, path="/")
    return {"message": "Logged out successfully"}


@router.get("/auth/session")
async def session_status(request: Request):
    return {"authenticated": is_admin(request)}
