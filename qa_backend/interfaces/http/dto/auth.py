from __future__ import annotations

import re

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from qa_backend.application.services.password_hashing import MAX_PASSWORD_BYTES

_USERNAME_RE = re.compile(r"^[A-Za-z0-9_.\-]+$")
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class SignupRequestDTO(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    username: str = Field(
        min_length=1, max_length=64, validation_alias=AliasChoices("username", "userName")
    )
    email: str = Field(
        min_length=3, max_length=254, validation_alias=AliasChoices("email", "emailAddress")
    )
    password: str = Field(min_length=1, max_length=128)
    first_name: str | None = Field(
        None, max_length=64, validation_alias=AliasChoices("first_name", "firstName")
    )
    last_name: str | None = Field(
        None, max_length=64, validation_alias=AliasChoices("last_name", "lastName")
    )
    about_me: str | None = Field(
        None, max_length=512, validation_alias=AliasChoices("about_me", "aboutMe")
    )
    country: str | None = Field(None, max_length=64)
    contact_number: str | None = Field(
        None, max_length=32, validation_alias=AliasChoices("contact_number", "contactNumber")
    )

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        if not _USERNAME_RE.match(value):
            raise PydanticCustomError(
                "username_invalid_chars",
                "Username may contain only letters, digits, '_', '.' and '-'",
                {"pattern": _USERNAME_RE.pattern},
            )
        return value

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        if not _EMAIL_RE.match(value):
            raise PydanticCustomError("email_invalid", "Email address is malformed", {})
        return value

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise PydanticCustomError(
                "password_too_long",
                "Password must not exceed {max_bytes} bytes",
                {"max_bytes": MAX_PASSWORD_BYTES},
            )
        return value


class SigninCredentialsDTO(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=128)  # No strength check on sign-in


class SignupResponseDTO(BaseModel):
    id: str
    status: str = "USER SUCCESSFULLY REGISTERED"


class SigninResponseDTO(BaseModel):
    id: str
    message: str = "SIGNED IN SUCCESSFULLY"


class SignoutResponseDTO(BaseModel):
    id: str
    message: str = "SIGNED OUT SUCCESSFULLY"
