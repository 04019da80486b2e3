from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    """Local profile marker. Not a credential: there is no password or token."""
    model_config = ConfigDict(frozen=True)

    name: str
    email: str
