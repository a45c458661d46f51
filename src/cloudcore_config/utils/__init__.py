"""Shared utilities for the cloudcore-config package."""

from cloudcore_config.utils.logging import configure_logging

__all__ = ["configure_logging"]
