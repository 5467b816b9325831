"""Authentication models shared by the token store and the auth API."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, Enum):
    CONSULTANT = "CONSULTANT"
    REVIEWER = "REVIEWER"
    ADMIN = "ADMIN"


_ROLE_LABELS = {
    UserRole.CONSULTANT: "상담사",
    UserRole.REVIEWER: "검토자",
    UserRole.ADMIN: "관리자",
}


def role_label(role: UserRole | str | None) -> str:
    """Display label for a role; unknown roles are returned as-is."""
    if not role:
        return ""
    try:
        return _ROLE_LABELS[UserRole(role)]
    except ValueError:
        return str(role)


class AuthUser(BaseModel):
    """Locally cached projection of the signed-in user."""

    employee_id: str
    name: str
    department: str = ""
    role: UserRole


class DepartmentRef(BaseModel):
    id: str
    department_code: str
    department_name: str
    is_active: bool | None = None


class ApiUser(BaseModel):
    """User record as returned by ``GET /api/v1/auth/me``."""

    id: int
    username: str
    employee_id: str
    name: str
    role: UserRole
    is_active: bool = True
    created_at: str | None = None
    updated_at: str | None = None
    departments: list[DepartmentRef] = Field(default_factory=list)

    def to_auth_user(self) -> AuthUser:
        department = self.departments[0].department_name if self.departments else ""
        return AuthUser(
            employee_id=self.employee_id,
            name=self.name,
            department=department,
            role=self.role,
        )


class TokenResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(alias="accessToken")
    refresh_token: str | None = Field(default=None, alias="refreshToken")
    token_type: str = "bearer"


class LoginPayload(BaseModel):
    username: str
    password: str


class SignupPayload(BaseModel):
    username: str
    employee_id: str
    name: str
    department: str
    password: str
    role: UserRole | None = None


class AuthTokenSet(BaseModel):
    """Tokens plus the cached user; lives from login until logout or refresh failure."""

    access_token: str
    refresh_token: str | None = None
    user: AuthUser | None = None
