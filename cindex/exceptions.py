"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of CIndex, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Exception types raised by CIndex.

Structural problems (an unknown dialect, an invalid index definition) are
raised immediately and never retried. Errors raised by an executor are not
wrapped and reach the caller unchanged.
"""

from typing import Any


class CIndexError(Exception):
    """Base class for all CIndex errors."""


class UnsupportedPlatformError(CIndexError):
    """Raised when SQL is requested for a database dialect CIndex cannot render."""

    def __init__(self, platform: Any):
        self.platform = platform
        super().__init__(f"Platform {platform} is not supported")


class IndexValidationError(CIndexError, ValueError):
    """
    Raised when an index definition fails one or more validation rules.

    Carries every violation found so they can be reported together.
    """

    def __init__(self, violations: list):
        self.violations = list(violations)
        details = "; ".join(f"{v.field_name}: {v.message}" for v in self.violations)
        super().__init__(f"Invalid index definition ({len(self.violations)} violation(s)): {details}")
