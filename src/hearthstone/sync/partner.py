"""
Partner linking.

Invite codes are 6 characters from an alphabet without look-alikes
(no O/0/I/1) and expire after invite_expiry_days. Accepting a code
links both profiles; if the second link fails the first is rolled back.
"""

import logging
import random
from datetime import datetime, timedelta

from pydantic import BaseModel
from supabase import Client

from hearthstone.errors import PartnerLinkError, SyncError
from hearthstone.sync.client import get_client

logger = logging.getLogger(__name__)

INVITE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
INVITE_CODE_LENGTH = 6
DEFAULT_INVITE_EXPIRY_DAYS = 7


class PartnerLink(BaseModel):
    partner_id: str
    partner_name: str


def generate_invite_code(rng: random.Random | None = None) -> str:
    rng = rng or random.SystemRandom()
    return "".join(rng.choice(INVITE_ALPHABET) for _ in range(INVITE_CODE_LENGTH))


def _parse_expiry(value: str) -> datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value).replace(tzinfo=None)


class PartnerLinker:
    """Invite/accept/unlink flows for one signed-in user."""

    def __init__(
        self,
        user_id: str,
        client: Client | None = None,
        rng: random.Random | None = None,
        invite_expiry_days: int = DEFAULT_INVITE_EXPIRY_DAYS,
        clock=None,
    ):
        self.user_id = user_id
        self._client = client
        self.rng = rng
        self.invite_expiry_days = invite_expiry_days
        self._clock = clock or datetime.now

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_client()
        return self._client

    def _run(self, query, action: str) -> list[dict]:
        try:
            return query.execute().data or []
        except Exception as e:
            logger.error(f"Partner {action} failed: {e}")
            raise SyncError(f"{action} failed: {e}") from e

    def create_invite(self) -> str:
        """Upsert a fresh invite code for this user (replacing any previous one)."""
        code = generate_invite_code(self.rng)
        expires_at = self._clock() + timedelta(days=self.invite_expiry_days)
        self._run(
            self.client.table("partner_invites").upsert({
                "user_id": self.user_id,
                "code": code,
                "expires_at": expires_at.isoformat(),
                "used": False,
            }),
            "create_invite",
        )
        logger.info(f"Created partner invite {code}")
        return code

    def accept_invite(self, code: str) -> PartnerLink:
        """
        Link this user with the invite's owner.

        Raises:
            PartnerLinkError: Invalid, used, expired or own code
            SyncError: Supabase failure (after rolling back a partial link)
        """
        code = code.strip().upper()
        rows = self._run(
            self.client.table("partner_invites")
            .select("user_id, expires_at, used")
            .eq("code", code)
            .limit(1),
            "find_invite",
        )
        if not rows:
            raise PartnerLinkError("Invalid invite code")
        invite = rows[0]
        if invite.get("used"):
            raise PartnerLinkError("This invite has already been used")
        if _parse_expiry(invite["expires_at"]) < self._clock():
            raise PartnerLinkError("This invite has expired")
        partner_id = invite["user_id"]
        if partner_id == self.user_id:
            raise PartnerLinkError("You cannot partner with yourself")

        profiles = self._run(
            self.client.table("profiles").select("name").eq("id", partner_id).limit(1),
            "get_partner_name",
        )
        partner_name = (profiles[0].get("name") if profiles else None) or "Partner"

        self._set_partner(self.user_id, partner_id)
        try:
            self._set_partner(partner_id, self.user_id)
        except SyncError:
            logger.warning(f"Rolling back partner link for {self.user_id}")
            self._set_partner(self.user_id, None)
            raise

        self._run(
            self.client.table("partner_invites").update({"used": True}).eq("code", code),
            "mark_invite_used",
        )
        logger.info(f"Linked {self.user_id} with partner {partner_id}")
        return PartnerLink(partner_id=partner_id, partner_name=partner_name)

    def unlink(self) -> str | None:
        """
        Clear the partner link on both profiles.

        Returns:
            The former partner's id, None if no partner was linked
        """
        rows = self._run(
            self.client.table("profiles").select("partner_id").eq("id", self.user_id).limit(1),
            "get_profile",
        )
        partner_id = rows[0].get("partner_id") if rows else None
        if not partner_id:
            return None

        self._set_partner(self.user_id, None)
        try:
            self._set_partner(partner_id, None)
        except SyncError as e:
            # Own profile is already unlinked
            logger.error(f"Could not unlink partner side {partner_id}: {e}")
        return partner_id

    def active_invite_code(self) -> str | None:
        """This user's unused, unexpired invite code, if any."""
        rows = self._run(
            self.client.table("partner_invites")
            .select("code, expires_at, used")
            .eq("user_id", self.user_id)
            .eq("used", False)
            .gt("expires_at", self._clock().isoformat())
            .limit(1),
            "get_active_invite",
        )
        return rows[0]["code"] if rows else None

    def _set_partner(self, user_id: str, partner_id: str | None) -> None:
        self._run(
            self.client.table("profiles").update({"partner_id": partner_id}).eq("id", user_id),
            "set_partner",
        )
