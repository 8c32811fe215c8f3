"""Operation status enumeration.

Classifies outcomes of collaborator calls (external cache, providers) so
callers can decide between degrading and propagating.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed successfully
        TRANSIENT_ERROR: Retryable error (connection refused, timeout)
        PERMANENT_ERROR: Non-retryable error (bad payload, protocol error)
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
