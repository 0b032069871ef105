"""Domain models for guest cards."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GuestRecord:
    """A stored guest card: who it is for and where the rendered image lives."""

    id: str
    name: str
    number: str
    image_path: str
