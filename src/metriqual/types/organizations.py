"""
Organization, membership and invitation types.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from metriqual.types.base import MqlModel

UserRole = Literal["owner", "admin", "developer", "viewer"]


class Organization(MqlModel):
    id: str
    name: str
    display_name: str | None = None
    created_at: str | None = None
    member_count: int | None = None
    your_role: str | None = None
    owner_email: str | None = None


class CreateOrganizationRequest(MqlModel):
    name: str
    display_name: str | None = None


class UserOrganizationsResponse(MqlModel):
    organizations: list[Organization] = Field(default_factory=list)


class OrganizationMember(MqlModel):
    user_id: str
    email: str
    role: str
    joined_at: str | None = None


class OrganizationInvite(MqlModel):
    id: str
    email: str
    role: str
    status: str = "pending"
    expires_at: str | None = None


class InviteMemberRequest(MqlModel):
    email: str
    role: UserRole


class PendingInvite(MqlModel):
    """An invitation addressed to the current user."""

    id: str
    org_id: str
    org_name: str
    org_display_name: str | None = None
    role: str
    expires_at: str | None = None


class AcceptInviteResponse(MqlModel):
    org_id: str
    role: str
