"""API credential models."""

from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    """API key pair held in memory for the active session."""

    api_key: str = Field(..., min_length=1, repr=False)
    secret_key: str = Field(..., min_length=1, repr=False)

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


class SavedCredential(BaseModel):
    """Named credential pair as persisted by a credential store."""

    name: str = Field(..., min_length=1)
    api_key: str = Field(..., min_length=1, repr=False)
    secret_key: str = Field(..., min_length=1, repr=False)

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    def credentials(self) -> Credentials:
        """Session credentials for this saved entry."""
        return Credentials(api_key=self.api_key, secret_key=self.secret_key)
