from __future__ import annotations

from pydantic import BaseModel, IPvAnyAddress, field_validator


class AttemptKey(BaseModel):
    """The (address, action) pair an attempt is recorded under."""

    address: IPvAnyAddress
    action: str

    @field_validator("address", mode="before")
    @classmethod
    def validate_address_literal(cls, v: object) -> object:
        """Only textual IP literals are accepted; integers and bytes are not addresses."""
        if not isinstance(v, str):
            raise ValueError("address must be an IP address string")
        return v

    @field_validator("action")
    @classmethod
    def validate_action(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("action must not be empty")
        return v

    @property
    def normalized_address(self) -> str:
        return str(self.address)


class CheckResponse(BaseModel):
    address: str
    action: str
    limit: int
    count: int
    remaining: int
    allowed: bool


class DeleteResponse(BaseModel):
    deleted: int
