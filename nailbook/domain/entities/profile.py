from dataclasses import dataclass


@dataclass(frozen=True)
class Profile:
    display_name: str
    picture_ref: str | None = None
