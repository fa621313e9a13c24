from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LoginRequestDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=128)

    @field_validator("username")
    @classmethod
    def _strip_username(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Username cannot be empty")
        return value


class LoginResponseDTO(BaseModel):
    token: str
    username: str
    role: str
