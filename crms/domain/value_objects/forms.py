"""
Form Schemas - Client-side validation of the authentication forms.

Validation runs before any request is issued; failures become inline
notices, never network calls.
"""

import re
from typing import Literal

from pydantic import BaseModel, ValidationError, field_validator, model_validator


EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
NAME_PATTERN = re.compile(r"^[a-zA-Z\s]+$")


def _check_email(value: str) -> str:
    value = value.strip()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Please enter a valid email address")
    return value


def _check_strong_password(value: str) -> str:
    if len(value) < 8:
        raise ValueError("Password must be at least 8 characters")
    if not re.search(r"[A-Z]", value):
        raise ValueError("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", value):
        raise ValueError("Password must contain at least one lowercase letter")
    if not re.search(r"[0-9]", value):
        raise ValueError("Password must contain at least one number")
    if not re.search(r"[^A-Za-z0-9]", value):
        raise ValueError("Password must contain at least one special character")
    return value


class LoginForm(BaseModel):
    """Login form."""

    email: str
    password: str

    @field_validator("email")
    @classmethod
    def valid_email(cls, v: str) -> str:
        return _check_email(v)

    @field_validator("password")
    @classmethod
    def long_enough(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v


class RegisterForm(BaseModel):
    """Registration form, including the password confirmation."""

    name: str
    email: str
    password: str
    confirm_password: str
    role: Literal["user", "admin"] = "user"

    @field_validator("name")
    @classmethod
    def valid_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters")
        if len(v) > 50:
            raise ValueError("Name cannot exceed 50 characters")
        if not NAME_PATTERN.match(v):
            raise ValueError("Name can only contain letters and spaces")
        return v

    @field_validator("email")
    @classmethod
    def valid_email(cls, v: str) -> str:
        return _check_email(v)

    @field_validator("password")
    @classmethod
    def strong_password(cls, v: str) -> str:
        return _check_strong_password(v)

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterForm":
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self

    def payload(self) -> dict:
        """Body of the signup request."""
        return {
            "name": self.name,
            "email": self.email,
            "password": self.password,
            "role": self.role,
        }


class PasswordResetForm(BaseModel):
    """Request a reset link by email."""

    email: str

    @field_validator("email")
    @classmethod
    def valid_email(cls, v: str) -> str:
        return _check_email(v)


class PasswordChangeForm(BaseModel):
    """Set a new password with the token from the reset email."""

    new_password: str
    reset_token: str
    confirm_password: str | None = None

    @field_validator("new_password")
    @classmethod
    def long_enough(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v

    @field_validator("reset_token")
    @classmethod
    def token_present(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Reset link is invalid or incomplete")
        return v.strip()

    @model_validator(mode="after")
    def passwords_match(self) -> "PasswordChangeForm":
        if self.confirm_password is not None and self.confirm_password != self.new_password:
            raise ValueError("Passwords don't match")
        return self


def first_error(exc: ValidationError) -> str:
    """Human-readable message of the first validation issue."""
    errors = exc.errors()
    if not errors:
        return "Invalid input"
    message = errors[0].get("msg", "Invalid input")
    # pydantic prefixes messages raised from validators
    return message.removeprefix("Value error, ")
