from __future__ import annotations

import logging

from nailbook.application.ports.identity import IdentityPort
from nailbook.domain.entities.profile import Profile


class MockIdentity(IdentityPort):
    def __init__(self, profile: Profile | None = None) -> None:
        self._profile = profile
        self._logger = logging.getLogger(__name__)

    def get_profile(self, access_token: str | None) -> Profile | None:
        self._logger.info("Mock profile lookup", extra={"status": "found" if self._profile else "anonymous"})
        return self._profile
