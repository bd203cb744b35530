"""
Organizations API - organizations, members and invitations.

Management endpoints; these require a session token.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote

from metriqual.types import (
    AcceptInviteResponse,
    CreateOrganizationRequest,
    DeleteResponse,
    InviteMemberRequest,
    Organization,
    OrganizationInvite,
    OrganizationMember,
    PendingInvite,
    UserOrganizationsResponse,
    UserRole,
    decode,
    decode_list,
)

if TYPE_CHECKING:
    from metriqual.transport import HttpTransport

ORGANIZATIONS_PATH = "/v1/organizations"
INVITES_PATH = "/v1/invites"


def _org_path(org_id: str) -> str:
    return f"{ORGANIZATIONS_PATH}/{quote(org_id, safe='')}"


class OrganizationsAPI:
    """Organization administration.

    Example:
        >>> org = await admin.organizations.create(
        ...     CreateOrganizationRequest(name="acme", display_name="Acme Inc.")
        ... )
        >>> await admin.organizations.invite_member(
        ...     org.id, InviteMemberRequest(email="dev@acme.test", role="developer")
        ... )
    """

    def __init__(self, transport: HttpTransport) -> None:
        self._transport = transport

    async def list(self) -> UserOrganizationsResponse:
        """List the organizations the current user belongs to."""
        data = await self._transport.get(ORGANIZATIONS_PATH)
        return decode(UserOrganizationsResponse, data)

    async def get(self, org_id: str) -> Organization:
        data = await self._transport.get(_org_path(org_id))
        return decode(Organization, data)

    async def create(self, request: CreateOrganizationRequest) -> Organization:
        data = await self._transport.post(ORGANIZATIONS_PATH, request.to_payload())
        return decode(Organization, data)

    # Members

    async def list_members(self, org_id: str) -> list[OrganizationMember]:
        data = await self._transport.get(f"{_org_path(org_id)}/members")
        return decode_list(OrganizationMember, data, envelope="members")

    async def update_member_role(self, org_id: str, user_id: str, role: UserRole) -> None:
        """Change a member's role."""
        await self._transport.patch(
            f"{_org_path(org_id)}/members/{quote(user_id, safe='')}", {"role": role}
        )

    async def remove_member(self, org_id: str, user_id: str) -> DeleteResponse:
        data = await self._transport.delete(
            f"{_org_path(org_id)}/members/{quote(user_id, safe='')}"
        )
        return decode(DeleteResponse, data)

    # Invitations

    async def list_invites(self, org_id: str) -> list[OrganizationInvite]:
        data = await self._transport.get(f"{_org_path(org_id)}/invites")
        return decode_list(OrganizationInvite, data, envelope="invites")

    async def invite_member(
        self, org_id: str, request: InviteMemberRequest
    ) -> OrganizationInvite:
        """Invite someone by email."""
        data = await self._transport.post(f"{_org_path(org_id)}/invites", request.to_payload())
        return decode(OrganizationInvite, data)

    async def resend_invite(self, org_id: str, invite_id: str) -> None:
        """Send the invitation email again."""
        await self._transport.post(
            f"{_org_path(org_id)}/invites/{quote(invite_id, safe='')}/resend"
        )

    async def cancel_invite(self, org_id: str, invite_id: str) -> DeleteResponse:
        data = await self._transport.delete(
            f"{_org_path(org_id)}/invites/{quote(invite_id, safe='')}"
        )
        return decode(DeleteResponse, data)

    async def get_my_invites(self) -> list[PendingInvite]:
        """List pending invitations addressed to the current user."""
        data = await self._transport.get(f"{INVITES_PATH}/pending")
        return decode_list(PendingInvite, data, envelope="invites")

    async def accept_invite(self, token: str) -> AcceptInviteResponse:
        """Accept an invitation using its token (the invite id when signed in)."""
        data = await self._transport.post(f"{INVITES_PATH}/accept", {"token": token})
        return decode(AcceptInviteResponse, data)
