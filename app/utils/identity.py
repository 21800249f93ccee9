import logging
from typing import Optional

import httpx
from fastapi import Depends

from app.config import Settings, get_settings
from app.services.errors import IdentityVerificationError

logger = logging.getLogger(__name__)


class IdentityVerifier:
    """
    Checks a signed sign-in message with the identity relay and returns the
    external user id (fid) it was signed for.
    """

    def __init__(
        self,
        verify_url: str,
        timeout: float = 5,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.verify_url = verify_url
        self.timeout = timeout
        self.transport = transport

    async def verify(self, message: str, signature: str, nonce: str, domain: str) -> int:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                res = await client.post(
                    self.verify_url,
                    json={
                        "message": message,
                        "signature": signature,
                        "nonce": nonce,
                        "domain": domain,
                    },
                )
            data = res.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Identity verification request failed: %r", e)
            raise IdentityVerificationError(f"Identity verification request failed: {e}")

        if not isinstance(data, dict):
            data = {}
        fid = data.get("fid")
        if res.status_code != 200 or not data.get("success") or fid is None:
            error = data.get("error")
            raise IdentityVerificationError(f"Sign-in message could not be verified ({error or res.status_code})")

        # the relay may send the fid as a number or a digit string
        if isinstance(fid, int) and not isinstance(fid, bool):
            return fid
        if isinstance(fid, str) and fid.strip().isdigit():
            return int(fid)
        logger.warning("Identity relay returned a malformed fid: %r", fid)
        raise IdentityVerificationError("Identity relay returned a malformed fid")


def get_identity_verifier(settings: Settings = Depends(get_settings)) -> IdentityVerifier:
    return IdentityVerifier(settings.identity_verify_url, settings.identity_timeout_seconds)
