"""Infrastructure modules for the translation engine.

Centralized infrastructure components:
- configuration: Settings management (settings, I18nSettings, CacheSettings)
- logging: Structured logging (configure_logging, get_module_logger)
- events: Notification channel for translation events
- operations: Uniform operation results (OperationResult, OperationStatus)
- cache: External cache tier interface and in-memory backend
- i18n: Translation resolution and interchange engine
"""

# Configuration
from infrastructure.configuration import settings

# Operations
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = ["settings", "OperationResult", "OperationStatus"]
