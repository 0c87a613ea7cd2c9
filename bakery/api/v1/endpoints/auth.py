"""Authentication endpoints (API JWT)."""

import logging

from fastapi import APIRouter, HTTPException, status

from bakery.core.security import ADMIN_ROLE, authenticate_admin, create_access_token
from bakery.schemas.auth import LoginRequest, TokenResponse

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest) -> TokenResponse:
    if not authenticate_admin(payload.username, payload.password):
        logger.info("[AUTH] Rejected login for username=%s", payload.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect username or password")
    return TokenResponse(access_token=create_access_token(data={"sub": payload.username, "role": ADMIN_ROLE}))
