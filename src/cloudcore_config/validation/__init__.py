"""
CloudCore configuration validation.

Field paths, field errors, primitive checks and the per-module validators.
"""

from cloudcore_config.validation.cloudcore import (
    ensure_valid,
    validate_cloudcore_configuration,
    validate_kube_api_config,
    validate_module_cloudhub,
    validate_module_device_controller,
    validate_module_edge_controller,
    validate_module_sync_controller,
)
from cloudcore_config.validation.field import (
    ConfigValidationError,
    ErrorList,
    ErrorType,
    FieldError,
    FieldPath,
    invalid,
    not_found,
    required,
)

__all__ = [
    "ConfigValidationError",
    "ErrorList",
    "ErrorType",
    "FieldError",
    "FieldPath",
    "ensure_valid",
    "invalid",
    "not_found",
    "required",
    "validate_cloudcore_configuration",
    "validate_kube_api_config",
    "validate_module_cloudhub",
    "validate_module_device_controller",
    "validate_module_edge_controller",
    "validate_module_sync_controller",
]
