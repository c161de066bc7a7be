"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of CIndex, licensed under the MIT License.
See LICENSE file for details.
"""

"""
CIndex - Custom Index management
Deterministically named partial and method-specific database indexes
"""

from cindex.definition import IndexDefinition, IndexDefinitionBuilder, IndexMethod
from cindex.dialects import Dialect, get_platform
from cindex.exceptions import CIndexError, IndexValidationError, UnsupportedPlatformError
from cindex.manager import CustomIndexManager, get_index_manager
from cindex.naming import PREFIX, normalize_name, resolve_name
from cindex.schema import CurrentSchemaResolver
from cindex.validation import validate_index_definition

__version__ = "0.1.0"

__all__ = [
    "PREFIX",
    "CIndexError",
    "CurrentSchemaResolver",
    "CustomIndexManager",
    "Dialect",
    "IndexDefinition",
    "IndexDefinitionBuilder",
    "IndexMethod",
    "IndexValidationError",
    "UnsupportedPlatformError",
    "get_index_manager",
    "get_platform",
    "normalize_name",
    "resolve_name",
    "validate_index_definition",
]
