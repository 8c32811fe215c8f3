"""Integration settings __init__ - exports all integration settings."""

from infrastructure.configuration.integrations.auto_translate import (
    AutoTranslateSettings,
)

__all__ = ["AutoTranslateSettings"]
