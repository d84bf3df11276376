from __future__ import annotations

from abc import ABC, abstractmethod

from nailbook.domain.entities.profile import Profile


class IdentityPort(ABC):
    @abstractmethod
    def get_profile(self, access_token: str | None) -> Profile | None:
        """Look up the platform profile. Returns None when not logged in or unavailable."""
        raise NotImplementedError
