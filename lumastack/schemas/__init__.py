"""Pydantic schemas used across the project."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from lumastack.modules.accounts import AccountCreateInput, AccountPatch, AccountRole


class AccountCreate(BaseModel):
    username: str = Field(..., max_length=50)
    email: str = Field(..., max_length=255)
    password: str
    role: AccountRole = AccountRole.USER

    def to_input(self) -> AccountCreateInput:
        return AccountCreateInput(
            username=self.username,
            email=self.email,
            password=self.password,
            role=self.role,
        )


class AccountUpdate(BaseModel):
    username: Optional[str] = Field(None, max_length=50)
    email: Optional[str] = Field(None, max_length=255)
    password: Optional[str] = None
    role: Optional[AccountRole] = None
    is_active: Optional[bool] = None

    def to_patch(self) -> AccountPatch:
        # Omitted and null fields both mean "leave unchanged".
        return AccountPatch(**self.model_dump(exclude_unset=True, exclude_none=True))


class AccountResponse(BaseModel):
    id: int
    username: str
    email: str
    role: AccountRole
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class HealthResponse(BaseModel):
    status: str = "ok"
    database: str
    version: str


class ApiInfoResponse(BaseModel):
    name: str
    description: str
    version: str
    status: str = "operational"
    timestamp: datetime
    environment: str
    endpoints: dict[str, str]
