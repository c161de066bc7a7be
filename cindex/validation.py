"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of CIndex, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Validation rules for index definitions.

The rule set is declarative: INDEX_DEFINITION_RULES maps each field of an
IndexDefinition to the constraints it must satisfy, so a host validation
framework can execute and report them its own way. validate_index_definition
runs every rule and collects all violations instead of stopping at the first.
Validation only checks the shape of the data; it never queries the database.
"""

from dataclasses import dataclass
from typing import Any

from cindex.core.logging import get_logger
from cindex.definition import IndexDefinition, IndexMethod
from cindex.exceptions import IndexValidationError
from cindex.naming import MAX_IDENTIFIER_LENGTH

logger = get_logger(__name__)


@dataclass
class ConstraintViolation:
    """A single failed constraint on an index definition field."""

    field_name: str
    constraint: str
    message: str
    value: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Convert the violation to a dictionary."""
        return {
            "field_name": self.field_name,
            "constraint": self.constraint,
            "message": self.message,
            "value": self.value,
        }


class Constraint:
    """Base class for field constraints."""

    id = "constraint"

    def check(self, value: Any) -> list[str]:
        """
        Check a value against the constraint.

        Args:
            value: The field value

        Returns:
            Messages describing each failure; empty when the value passes

        """
        return []


class NotBlank(Constraint):
    """Value must not be None or an empty/whitespace-only string."""

    id = "not_blank"

    def __init__(self, message: str = "This value should not be blank"):
        self.message = message

    def check(self, value: Any) -> list[str]:
        if value is None or (isinstance(value, str) and not value.strip()):
            return [self.message]
        return []


class Length(Constraint):
    """String length must fall within bounds. None is left to NotBlank."""

    id = "length"

    def __init__(
        self,
        min: int | None = None,
        max: int | None = None,
        min_message: str | None = None,
        max_message: str | None = None,
    ):
        self.min = min
        self.max = max
        self.min_message = min_message or f"This value is too short, minimum is {min} characters"
        self.max_message = max_message or f"This value is too long, maximum is {max} characters"

    def check(self, value: Any) -> list[str]:
        if not isinstance(value, str):
            return []
        if self.min is not None and len(value) < self.min:
            return [self.min_message]
        if self.max is not None and len(value) > self.max:
            return [self.max_message]
        return []


class Choice(Constraint):
    """Value must be one of a fixed set. None passes."""

    id = "choice"

    def __init__(self, choices: tuple):
        self.choices = tuple(choices)

    def check(self, value: Any) -> list[str]:
        if value is None or value in self.choices:
            return []
        return [f"The value '{value}' is not a valid choice, expected one of: {', '.join(self.choices)}"]


class Count(Constraint):
    """Collection must have at least ``min`` elements."""

    id = "count"

    def __init__(self, min: int, min_message: str | None = None):
        self.min = min
        self.min_message = min_message or f"This collection should contain {min} element(s) or more"

    def check(self, value: Any) -> list[str]:
        if len(value or ()) < self.min:
            return [self.min_message]
        return []


class Type(Constraint):
    """Value must be an instance of the given type."""

    id = "type"

    def __init__(self, expected: type, message: str | None = None):
        self.expected = expected
        self.message = message or f"This value should be of type {expected.__name__}"

    def check(self, value: Any) -> list[str]:
        if isinstance(value, self.expected):
            return []
        return [self.message]


class All(Constraint):
    """Apply nested constraints to every element of a collection."""

    id = "all"

    def __init__(self, constraints: tuple):
        self.constraints = tuple(constraints)

    def check(self, value: Any) -> list[str]:
        messages = []
        for position, element in enumerate(value or ()):
            for constraint in self.constraints:
                for message in constraint.check(element):
                    messages.append(f"[{position}] {message}")
        return messages


INDEX_DEFINITION_RULES: dict[str, tuple[Constraint, ...]] = {
    "table_name": (
        NotBlank(),
        Length(
            min=1,
            max=MAX_IDENTIFIER_LENGTH,
            min_message="TableName must be set",
            max_message="TableName is too long",
        ),
    ),
    "name": (
        Length(
            min=1,
            max=MAX_IDENTIFIER_LENGTH,
            min_message="Name must be set",
            max_message="Name is too long",
        ),
    ),
    "using": (Choice(IndexMethod.values()),),
    "columns": (
        Count(min=1, min_message="You must specify at least one column"),
        All((
            NotBlank(),
            Type(str, message="Column should be type of string"),
            Length(min=1),
        )),
    ),
}


def validate_index_definition(
    definition: IndexDefinition,
    rules: dict[str, tuple[Constraint, ...]] | None = None,
) -> list[ConstraintViolation]:
    """
    Run every rule against a definition.

    Args:
        definition: The index definition to check
        rules: Rule set to apply, defaults to INDEX_DEFINITION_RULES

    Returns:
        All violations found; an empty list means the definition is valid

    """
    rules = rules if rules is not None else INDEX_DEFINITION_RULES
    violations = []

    for field_name, constraints in rules.items():
        value = getattr(definition, field_name, None)
        for constraint in constraints:
            for message in constraint.check(value):
                violations.append(ConstraintViolation(
                    field_name=field_name,
                    constraint=constraint.id,
                    message=message,
                    value=value,
                ))

    if violations:
        logger.debug(f"Index definition {definition.name} has {len(violations)} violation(s)")
    return violations


def ensure_valid(definition: IndexDefinition) -> IndexDefinition:
    """
    Raise IndexValidationError if the definition breaks any rule.

    Returns:
        The definition, unchanged, when it is valid

    """
    violations = validate_index_definition(definition)
    if violations:
        raise IndexValidationError(violations)
    return definition
