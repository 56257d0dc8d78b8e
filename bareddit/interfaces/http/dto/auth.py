from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from bareddit.domain.users.entities import User, UserResponse


class _RequestDTO(BaseModel):
    model_config = ConfigDict(validate_by_name=True, extra="ignore")


class RegisterRequestDTO(_RequestDTO):
    username: str
    email: str
    password: str


class LoginRequestDTO(_RequestDTO):
    username_or_email: str = Field(alias="usernameOrEmail")
    password: str


class ForgotPasswordRequestDTO(_RequestDTO):
    email: str


class ChangePasswordRequestDTO(_RequestDTO):
    token: str
    new_password: str = Field(alias="newPassword")


class FieldErrorDTO(BaseModel):
    field: str
    message: str


class UserDTO(BaseModel):
    """Public view of a user; the password hash is never serialized."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")


class UserResponseDTO(BaseModel):
    errors: list[FieldErrorDTO] | None = None
    user: UserDTO | None = None

    @classmethod
    def from_domain(cls, response: UserResponse) -> "UserResponseDTO":
        if response.errors:
            return cls(
                errors=[FieldErrorDTO(field=e.field, message=e.message) for e in response.errors]
            )
        return cls(user=UserDTO.model_validate(response.user))

    def dump(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class MeResponseDTO(BaseModel):
    user: UserDTO | None = None

    @classmethod
    def from_domain(cls, user: User | None) -> "MeResponseDTO":
        return cls(user=UserDTO.model_validate(user) if user is not None else None)

    def dump(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class OkDTO(BaseModel):
    ok: bool = True
