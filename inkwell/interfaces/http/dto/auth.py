# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from inkwell.domain.users.entities import User


class SignupRequestDTO(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    username: str = Field(min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)

    @field_validator("email")
    @classmethod
    def _lower_email(cls, value: str) -> str:
        return value.lower()


class LoginRequestDTO(BaseModel):
    # No format check on email: a malformed address is just an unknown one.
    email: str = Field(min_length=1, max_length=254)
    password: str = Field(min_length=1, max_length=128)


class UserDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(serialization_alias="_id")
    username: str
    email: str

    @classmethod
    def from_domain(cls, user: User) -> UserDTO:
        return cls(id=user.id, username=user.username, email=user.email)


class AuthResponseDTO(BaseModel):
    token: str
    user: UserDTO


__all__ = ["AuthResponseDTO", "LoginRequestDTO", "SignupRequestDTO", "UserDTO"]
