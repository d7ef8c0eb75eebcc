from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from stateful.domain.errors import ValidationError
from stateful.domain.models.result import Err, Ok, Result

if TYPE_CHECKING:
    from collections.abc import Mapping


class DefaultParams:
    """
    Map-backed `Params` bag threaded through one `run` / `batch_run` call.

    Not synchronized: actions that fan out work over threads must guard their
    own writes.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Any] | None = None, /, **kwargs: Any) -> None:
        self._values: dict[str, Any] = {**(values or {}), **kwargs}

    def get(self, key: str, /) -> tuple[Any, bool]:
        if key in self._values:
            return self._values[key], True
        return None, False

    def set(self, key: str, value: Any, /) -> None:
        self._values[key] = value

    def get_as[T](self, key: str, expected_type: type[T], /) -> Result[T, ValidationError]:
        """Read `key` and validate/coerce it to `expected_type`."""
        from pydantic import TypeAdapter  # noqa: PLC0415 - keep the domain import-light
        from pydantic import ValidationError as PydanticValidationError  # noqa: PLC0415

        value, found = self.get(key)
        if not found:
            return Err(ValidationError(f"Param {key!r} is not set."))
        if isinstance(expected_type, type) and isinstance(value, expected_type):
            return Ok(value)
        try:
            validated = TypeAdapter(expected_type).validate_python(value)
        except PydanticValidationError as exc:
            return Err(ValidationError(f"Param {key!r} failed validation: {exc}"))
        return Ok(cast("T", validated))

    def as_dict(self) -> dict[str, Any]:
        return dict(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"DefaultParams({self._values!r})"
