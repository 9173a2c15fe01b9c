"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, computed_field, model_validator

DEV_SIGNING_KEY = "dev-bookstore-signing-key-change-me-0123456789"


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5000"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class JWTClaimsConfig(BaseModel):
    """Claim names written into issued session tokens."""

    user_id: str = Field(
        default="nameid", description="Claim carrying the user's internal id"
    )
    roles: str = Field(default="role", description="Claim carrying role names")


class JWTConfig(BaseModel):
    """Session token signing and validation configuration."""

    signing_key: str = Field(
        default=DEV_SIGNING_KEY, description="Symmetric key used for HS256 signing"
    )
    issuer: str = Field(
        default="bookstore-api", description="Issuer and audience of issued tokens"
    )
    algorithm: Literal["HS256"] = Field(
        default="HS256", description="Signing algorithm"
    )
    expires_in_seconds: int = Field(
        default=300, gt=0, description="Token lifetime in seconds"
    )
    clock_skew: int = Field(
        default=0, ge=0, description="Clock skew tolerance in seconds"
    )
    claims: JWTClaimsConfig = Field(
        default_factory=JWTClaimsConfig, description="JWT claims mapping configuration"
    )


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str | None = Field(
        default="logs/bookstore.log", description="Log file path, empty to disable"
    )
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./bookstore.db",
        description="Database connection URL",
    )
    password_env_var: str | None = Field(
        default=None,
        description="Environment variable name containing database password",
    )
    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    create_tables: bool = Field(
        default=True, description="Create missing tables and roles at startup"
    )
    echo: bool = Field(default=False, description="Echo SQL statements")

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the database connection string with password if provided."""
        import os

        from sqlalchemy.engine import make_url

        base_url = make_url(self.url)
        if base_url.password or not self.password_env_var:
            return self.url

        password = os.getenv(self.password_env_var)
        if not password:
            logger.warning(
                "Environment variable {} is not set; connecting without password",
                self.password_env_var,
            )
            return self.url
        return base_url.set(password=password).render_as_string(hide_password=False)

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def is_in_memory(self) -> bool:
        return self.is_sqlite and (self.url in ("sqlite://", "sqlite:///") or ":memory:" in self.url)


class PasswordPolicyConfig(BaseModel):
    """Password rules enforced at registration."""

    min_length: int = Field(default=6, ge=1)
    max_length: int | None = Field(default=None, description="Upper bound, None for no limit")
    require_digit: bool = True
    require_lowercase: bool = True
    require_uppercase: bool = True
    require_non_alphanumeric: bool = False


class SeedUserConfig(BaseModel):
    """Account created by the seed command."""

    email: str
    password: str
    roles: list[str] = Field(default_factory=list)


class SecurityConfig(BaseModel):
    """Identity configuration: roles, password policy and seeding."""

    roles: list[str] = Field(
        default_factory=lambda: ["Administrator", "Customer"],
        description="Roles created at startup",
    )
    admin_role: str = Field(
        default="Administrator", description="Role required for catalog writes"
    )
    default_role: str | None = Field(
        default="Customer", description="Role assigned on registration"
    )
    password: PasswordPolicyConfig = Field(default_factory=PasswordPolicyConfig)
    seed_users: list[SeedUserConfig] = Field(default_factory=list)


class AppConfig(BaseModel):
    """Application configuration model."""

    name: str = Field(default="BookStore API", description="Application title")
    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )

    @property
    def base_url(self) -> str:
        """Construct the base URL from host and port."""
        scheme = "https" if self.environment == "production" else "http"
        return f"{scheme}://{self.host}:{self.port}"


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    jwt: JWTConfig = Field(
        default_factory=JWTConfig, description="Session token configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    security: SecurityConfig = Field(
        default_factory=SecurityConfig, description="Identity configuration"
    )

    @model_validator(mode="after")
    def refuse_dev_key_in_production(self) -> ConfigData:
        if self.app.environment == "production" and self.jwt.signing_key == DEV_SIGNING_KEY:
            raise ValueError("The development JWT signing key cannot be used in production")
        return self
