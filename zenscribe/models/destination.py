from pydantic import BaseModel, ConfigDict, Field


class DestinationConfig(BaseModel):
    """WordPress connection details used when publishing an article."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    site_url: str = Field(default="", alias="siteUrl")
    username: str = ""
    application_password: str = Field(default="", alias="applicationPassword")
    is_configured: bool = Field(default=False, alias="isConfigured")

    @classmethod
    def from_fields(cls, site_url: str, username: str, application_password: str) -> "DestinationConfig":
        """Build a config whose flag says whether every field was filled in."""
        return cls(
            site_url=site_url.strip(),
            username=username.strip(),
            application_password=application_password,
            is_configured=bool(site_url.strip() and username.strip() and application_password.strip()),
        )
