"""DTOs for authenticated identities (owned by the identity provider)."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Identity:
    """Authenticated principal from the identity provider. Read-only to this layer.

    id_token and refresh_token are opaque provider credentials and are kept out
    of repr so they never end up in logs.
    """

    uid: str
    email: str
    display_name: str | None = None
    id_token: str = field(default="", repr=False, compare=False)
    refresh_token: str = field(default="", repr=False, compare=False)
