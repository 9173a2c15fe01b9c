"""Login and registration endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from src.bookstore.api.http.deps import get_auth_service
from src.bookstore.api.http.dtos import (
    LoginRequest,
    RegisterRequest,
    RegistrationResponse,
    TokenResponse,
)
from src.bookstore.api.http.responses import (
    action_location,
    describe_exception,
    internal_error,
)
from src.bookstore.core.errors import AuthenticationError
from src.bookstore.core.services import AuthService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("/login", response_model=TokenResponse)
def login(
    payload: LoginRequest,
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
) -> Any:
    """Exchange credentials for a signed session token."""
    location = action_location(request)
    try:
        user = auth_service.authenticate(payload.email_address, payload.password)
        token = auth_service.issue_token(user)
        logger.info("{}: User {} logged in", location, user.id)
        return TokenResponse(token=token)
    except AuthenticationError as e:
        logger.warning("{}: Login failed for {}", location, payload.email_address)
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": str(e)},
        )
    except Exception as e:
        return internal_error(f"{location}: {describe_exception(e)}")


@router.post("/register", response_model=RegistrationResponse)
def register(
    payload: RegisterRequest,
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
) -> Any:
    """Create an account. Registration does not log the user in.

    A rejected password or an email that is already registered answers 400
    with the ``{succeeded, errors}`` body so clients can show the reasons.
    Only identity store faults answer 500.
    """
    location = action_location(request)
    try:
        result = auth_service.register(payload.email_address, payload.password)
        if not result.succeeded:
            logger.warning(
                "{}: Registration rejected: {}",
                location,
                [error.code for error in result.errors],
            )
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=result.model_dump(),
            )
        logger.info("{}: Registration successful", location)
        return RegistrationResponse(succeeded=True)
    except Exception as e:
        return internal_error(f"{location}: {describe_exception(e)}")
