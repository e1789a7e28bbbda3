"""Request bodies accepted by the users service."""

from datetime import date
from typing import Any

from pydantic import Field, field_validator

from backend.validation import RequestModel, date_only


class RegisterRequest(RequestModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)
    birth_date: date = Field(alias="birthDate")

    @field_validator("birth_date", mode="before")
    @classmethod
    def strip_time(cls, value: Any) -> Any:
        return date_only(value)


class LoginRequest(RequestModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class VerifyIdentityRequest(RequestModel):
    email: str = Field(min_length=1)
    birth_date: date = Field(alias="birthDate")

    @field_validator("birth_date", mode="before")
    @classmethod
    def strip_time(cls, value: Any) -> Any:
        return date_only(value)


class ResetPasswordRequest(RequestModel):
    user_id: int = Field(alias="userId", strict=True)
    new_password: str = Field(min_length=1, alias="newPassword")


class DeleteAccountRequest(RequestModel):
    password: str = Field(min_length=1)
