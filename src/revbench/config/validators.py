"""Field validation utilities for benchmark configuration parsing.

This module provides a fluent API for validating and extracting fields
from configuration dictionaries with type checking and error handling.
"""

from __future__ import annotations

from typing import Any, TypeVar, overload

from revbench.config.exceptions import ConfigurationError

__all__ = ["FieldValidator"]

T = TypeVar("T")


def _type_name(value: Any) -> str:
    return type(value).__name__


class FieldValidator:
    """Fluent validator for configuration dictionary fields.

    Provides a clean API for validating and extracting typed fields from
    configuration dictionaries with consistent error handling.

    Example:
        v = FieldValidator(data, "benchmark[0]")
        command = v.require("command", str, empty_check=True)
        prepare = v.optional("prepare", str)
        revisions = v.optional_list("revisions", str, non_empty=True)

    """

    def __init__(self, data: dict[str, Any], context: str) -> None:
        """Initialize the validator with data and context.

        Args:
            data: Dictionary containing fields to validate.
            context: Context string for error messages (e.g., "benchmark[0]").

        """
        self._data = data
        self._context = context

    def require(
        self,
        field: str,
        expected_type: type[T],
        *,
        transform: Any | None = None,
        empty_check: bool = False,
    ) -> T:
        """Validate and extract a required field.

        Args:
            field: Name of the field to validate.
            expected_type: Expected type of the field value.
            transform: Optional callable to transform the value (e.g., str.strip).
            empty_check: If True and value is a string, check that it's non-empty.

        Returns:
            The validated and optionally transformed value.

        Raises:
            ConfigurationError: If field is missing, wrong type, or empty when
                empty_check is True.

        """
        if field not in self._data or self._data[field] is None:
            raise ConfigurationError(
                f"Missing required field '{field}' in {self._context}"
            )

        value = self._data[field]

        if not isinstance(value, expected_type) or (
            expected_type is not bool and isinstance(value, bool)
        ):
            raise ConfigurationError(
                f"Invalid '{field}': expected {expected_type.__name__}, "
                f"got {_type_name(value)} in {self._context}"
            )

        if transform is not None:
            value = transform(value)

        if empty_check and isinstance(value, str) and not value.strip():
            raise ConfigurationError(
                f"Invalid '{field}': must be a non-empty string in {self._context}"
            )

        return value  # type: ignore[return-value]

    @overload
    def optional(
        self,
        field: str,
        expected_type: type[T],
        *,
        default: T,
        transform: Any | None = None,
    ) -> T: ...

    @overload
    def optional(
        self,
        field: str,
        expected_type: type[T],
        *,
        default: None = None,
        transform: Any | None = None,
    ) -> T | None: ...

    def optional(
        self,
        field: str,
        expected_type: type[T],
        *,
        default: T | None = None,
        transform: Any | None = None,
    ) -> T | None:
        """Validate and extract an optional field.

        Args:
            field: Name of the field to validate.
            expected_type: Expected type of the field value.
            default: Default value if field is not present.
            transform: Optional callable to transform the value.

        Returns:
            The validated value, or default if not present.

        Raises:
            ConfigurationError: If field is present but has wrong type.

        """
        value = self._data.get(field)

        if value is None:
            return default

        if not isinstance(value, expected_type):
            raise ConfigurationError(
                f"Invalid '{field}': expected {expected_type.__name__}, "
                f"got {_type_name(value)} in {self._context}"
            )

        if transform is not None:
            value = transform(value)

        return value  # type: ignore[return-value]

    def require_int(self, field: str, *, minimum: int | None = None) -> int:
        """Validate and extract a required integer field with a lower bound.

        Args:
            field: Name of the field to validate.
            minimum: Smallest accepted value (inclusive), if any.

        Returns:
            The validated integer.

        Raises:
            ConfigurationError: If field is missing, not an integer, or below
                the minimum.

        """
        value = self.require(field, int)
        if minimum is not None and value < minimum:
            raise ConfigurationError(
                f"Invalid '{field}': must be >= {minimum}, got {value} in {self._context}"
            )
        return value

    def optional_list(
        self,
        field: str,
        item_type: type[T] | None = None,
        *,
        non_empty: bool = False,
    ) -> list[T] | None:
        """Validate and extract an optional list field.

        Args:
            field: Name of the field to validate.
            item_type: Expected type of list items (optional).
            non_empty: If True, a present list must contain at least one item.

        Returns:
            A copy of the validated list, or None if not present.

        Raises:
            ConfigurationError: If field is present but not a list, is empty
                when non_empty is True, or contains items of wrong type.

        """
        value = self._data.get(field)

        if value is None:
            return None

        if not isinstance(value, list):
            raise ConfigurationError(
                f"Invalid '{field}': expected list, "
                f"got {_type_name(value)} in {self._context}"
            )

        if non_empty and not value:
            raise ConfigurationError(
                f"Empty '{field}' list: must not be empty if provided in {self._context}"
            )

        if item_type is not None and not all(
            isinstance(item, item_type) for item in value
        ):
            raise ConfigurationError(
                f"Invalid '{field}': all items must be {item_type.__name__} in {self._context}"
            )

        return list(value)

    def require_mapping_field(
        self,
        field: str,
        *,
        non_empty: bool = True,
    ) -> dict[str, Any]:
        """Validate and extract a required mapping field with string keys.

        Args:
            field: Name of the field to validate.
            non_empty: If True, ensure the mapping has at least one entry.

        Returns:
            The validated mapping.

        Raises:
            ConfigurationError: If field is missing, not a mapping, empty when
                non_empty is True, or has a key that is not a non-empty string.

        """
        if field not in self._data or self._data[field] is None:
            raise ConfigurationError(
                f"Missing required field '{field}' in {self._context}"
            )

        value = self._data[field]

        if not isinstance(value, dict):
            raise ConfigurationError(
                f"Invalid '{field}': expected mapping, "
                f"got {_type_name(value)} in {self._context}"
            )

        if non_empty and not value:
            raise ConfigurationError(
                f"Empty '{field}': at least one entry required in {self._context}"
            )

        for key in value:
            if not isinstance(key, str) or not key.strip():
                raise ConfigurationError(
                    f"Invalid key {key!r} in '{field}': keys must be non-empty "
                    f"strings in {self._context}"
                )

        return value

    def require_mapping(self) -> dict[str, Any]:
        """Validate that the data is a dictionary/mapping.

        Returns:
            The data if it's a dict.

        Raises:
            ConfigurationError: If data is not a dict.

        """
        if not isinstance(self._data, dict):
            raise ConfigurationError(
                f"Invalid structure: expected mapping, "
                f"got {_type_name(self._data)} in {self._context}"
            )
        return self._data
