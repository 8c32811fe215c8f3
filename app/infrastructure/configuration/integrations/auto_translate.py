"""Auto-translation provider integration settings."""

from typing import Literal, Optional

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class AutoTranslateSettings(IntegrationSettings):
    """Auto-translation provider configuration.

    Environment Variables:
        AUTO_TRANSLATE_PROVIDER: google, deepl, azure, aws or http (unset disables)
        AUTO_TRANSLATE_API_KEY: Credential passed to the provider
        AUTO_TRANSLATE_ENDPOINT: Endpoint URL for the http provider
        AUTO_TRANSLATE_TIMEOUT_SECONDS: Request timeout for the http provider (default: 10)
    """

    provider: Optional[Literal["google", "deepl", "azure", "aws", "http"]] = Field(
        default=None, alias="AUTO_TRANSLATE_PROVIDER"
    )
    api_key: Optional[str] = Field(default=None, alias="AUTO_TRANSLATE_API_KEY")
    endpoint: Optional[str] = Field(default=None, alias="AUTO_TRANSLATE_ENDPOINT")
    timeout_seconds: float = Field(default=10.0, alias="AUTO_TRANSLATE_TIMEOUT_SECONDS")
