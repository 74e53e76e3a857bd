r"""Utilities shared by the retry engine."""

from __future__ import annotations

__all__ = ["StructuredFormatter", "log_structured"]

from aretryify.utils.structured_logging import StructuredFormatter, log_structured
