"""Unit tests for the authentication and role guard dependencies."""

from unittest.mock import Mock

import pytest
from fastapi import HTTPException, Request
from starlette.datastructures import Headers

from src.bookstore.api.http.deps import get_current_user, require_admin, require_role
from src.bookstore.core.models.claims import TokenClaims
from src.bookstore.core.services.jwt import JwtVerificationService


def _claims(*roles: str) -> TokenClaims:
    return TokenClaims(subject="reader@bookstore.com", user_id="user-1", roles=list(roles))


def _request(headers: dict[str, str]) -> Request:
    request = Mock(spec=Request)
    request.headers = Headers(headers)
    request.state = Mock()
    return request


class TestRoleDependency:
    """Test the require_role dependency function."""

    @pytest.mark.asyncio
    async def test_allows_request_with_required_role(self):
        claims = _claims("Customer", "Administrator")

        assert await require_role("Administrator")(claims) is claims

    @pytest.mark.asyncio
    async def test_blocks_request_without_required_role(self):
        with pytest.raises(HTTPException) as exc_info:
            await require_role("Administrator")(_claims("Customer"))

        assert exc_info.value.status_code == 403
        assert "Administrator" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_blocks_request_with_no_roles(self):
        with pytest.raises(HTTPException) as exc_info:
            await require_role("Customer")(_claims())

        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_role_comes_from_config(self, active_config):
        active_config.security.admin_role = "Librarian"

        claims = _claims("Librarian")
        assert await require_admin(claims) is claims

        with pytest.raises(HTTPException):
            await require_admin(_claims("Administrator"))


class TestCurrentUserDependency:
    """Test bearer token parsing."""

    @pytest.mark.asyncio
    async def test_missing_header(self, active_config):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(_request({}), JwtVerificationService())

        assert exc_info.value.status_code == 401
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}

    @pytest.mark.asyncio
    async def test_wrong_scheme(self, active_config):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(
                _request({"Authorization": "Basic dXNlcjpwYXNz"}), JwtVerificationService()
            )

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_valid_token(self, token_factory):
        request = _request({"Authorization": f"Bearer {token_factory(roles=['Customer'])}"})

        claims = await get_current_user(request, JwtVerificationService())

        assert claims.subject == "reader@bookstore.com"
        assert claims.roles == ["Customer"]
        assert request.state.uid == "user-1"
        assert request.state.roles == {"Customer"}

    @pytest.mark.asyncio
    async def test_scheme_is_case_insensitive(self, token_factory):
        request = _request({"Authorization": f"bearer {token_factory(roles=['Customer'])}"})

        claims = await get_current_user(request, JwtVerificationService())

        assert claims.roles == ["Customer"]

    @pytest.mark.asyncio
    async def test_scheme_without_token(self, active_config):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(_request({"Authorization": "Bearer "}), JwtVerificationService())

        assert exc_info.value.status_code == 401
