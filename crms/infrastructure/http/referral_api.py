"""
HTTP Referral API - ReferralApiPort over the REST endpoints.
"""

import logging
import mimetypes
from typing import Any, Iterable

from crms.application.interfaces import ApiError, ReferralApiPort, ResponseFormatError
from crms.domain.entities import Referral, ReferralStatus
from crms.domain.value_objects import ReferralInput

from .api_client import ApiClient


logger = logging.getLogger(__name__)


def parse_referrals(body: Any) -> list[Referral]:
    """
    Validate a list response into Referral entities.

    Raises:
        ResponseFormatError: If the body is not a list of valid records.
    """
    if not isinstance(body, list):
        raise ResponseFormatError("Invalid referrals response")
    try:
        return [Referral.from_dict(item) for item in body]
    except (AttributeError, TypeError, ValueError) as e:
        raise ResponseFormatError(f"Invalid referral record: {e}") from e


class HttpReferralApi(ReferralApiPort):
    """Referral endpoints under ``/api/user``."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    async def fetch_all_referrals(self) -> list[Referral]:
        return parse_referrals(await self.client.get("/admin/referrals"))

    async def fetch_my_referrals(self) -> list[Referral]:
        return parse_referrals(await self.client.get("/my-referrals"))

    async def submit_referral(self, referral_input: ReferralInput) -> dict:
        """Multipart submission; the resume file is attached when given."""
        files = None
        path = referral_input.resume_file
        if path is not None:
            try:
                content = path.read_bytes()
            except OSError as e:
                logger.warning(f"Resume not readable at {path}: {e}")
                raise ApiError(f"Could not read resume file {path.name}") from e
            content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
            files = {"resume": (path.name, content, content_type)}

        body = await self.client.post(
            "/referal-submit",
            data=referral_input.form_fields(),
            files=files,
        )
        logger.info(f"Submitted referral for {referral_input.email}")
        return body if isinstance(body, dict) else {}

    async def update_status(self, referral_id: str, status: ReferralStatus) -> Any:
        return await self.client.put(
            f"/admin/referrals/{referral_id}/status",
            json={"status": status.value},
        )

    async def bulk_update_status(
        self,
        referral_ids: Iterable[str],
        status: ReferralStatus,
    ) -> Any:
        updates = [
            {"referralId": referral_id, "status": status.value}
            for referral_id in referral_ids
        ]
        return await self.client.put(
            "/admin/referrals/bulk-status-update",
            json={"updates": updates},
        )

    async def delete_referral(self, referral_id: str) -> Any:
        return await self.client.delete(f"/admin/referrals/{referral_id}")

    async def fetch_analytics(self, graph_type: str) -> dict:
        body = await self.client.get("/admin/analytics", params={"type": graph_type})
        if not isinstance(body, dict):
            raise ResponseFormatError("No data received from server")
        return body
