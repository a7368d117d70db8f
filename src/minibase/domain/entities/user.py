"""User entity."""

from dataclasses import dataclass


@dataclass
class User:
    """A user account in the fixed ``users`` table."""

    id: int
    name: str
