"""Operation result types and status enums."""

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = ["OperationResult", "OperationStatus"]
