"""
Issuance component.

Public API for validating new passes and purchase requests.
"""

from .component import (
    build_purchased_pass,
    load_config_from_rules,
    run,
    validate_for_issuance,
    validate_purchase_request,
)
from .models import (
    IssuanceConfig,
    IssuanceErrorCode,
    IssuanceInput,
    IssuanceValidationError,
    PurchaseInput,
    ValidationResult,
)
from .ports import ScheduleSourcePort

__all__ = [
    # Functions
    "build_purchased_pass",
    "load_config_from_rules",
    "run",
    "validate_for_issuance",
    "validate_purchase_request",
    # Models
    "IssuanceConfig",
    "IssuanceErrorCode",
    "IssuanceInput",
    "IssuanceValidationError",
    "PurchaseInput",
    "ValidationResult",
    # Ports
    "ScheduleSourcePort",
]
