"""Connection parameters for the hosted document store and identity provider."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ConnectionConfig(BaseModel):
    """Web app connection config, persisted locally as camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    api_key: str = ""
    auth_domain: str = ""
    project_id: str = ""
    storage_bucket: str = ""
    messaging_sender_id: str = ""
    app_id: str = ""

    @property
    def is_complete(self) -> bool:
        """A usable config needs at least the API key and the project ID."""
        return bool(self.api_key.strip() and self.project_id.strip())
