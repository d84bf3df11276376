from __future__ import annotations

import logging

import httpx

from nailbook.application.ports.identity import IdentityPort
from nailbook.core.config import settings
from nailbook.domain.entities.profile import Profile


class LineIdentity(IdentityPort):
    def __init__(
        self,
        profile_endpoint: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._profile_endpoint = profile_endpoint or settings.LINE_PROFILE_ENDPOINT
        self._client = client or httpx.Client(timeout=10.0)
        self._logger = logging.getLogger(__name__)

    def get_profile(self, access_token: str | None) -> Profile | None:
        if not access_token:
            return None
        headers = {"Authorization": f"Bearer {access_token}"}
        try:
            resp = self._client.get(self._profile_endpoint, headers=headers)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            self._logger.warning("LINE profile lookup failed", extra={"error": str(e)})
            return None

        display_name = (data.get("displayName") or "").strip() if isinstance(data, dict) else ""
        if not display_name:
            return None
        return Profile(display_name=display_name, picture_ref=data.get("pictureUrl"))
