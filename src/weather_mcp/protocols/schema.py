"""Argument schemas — tool parameters described as data.

A :class:`ArgumentSchema` is both the machine-readable advertisement sent in
``tools/list`` (via :meth:`ArgumentSchema.to_json_schema`) and the validator
applied before a tool runs (via :meth:`ArgumentSchema.validate_arguments`).
Both views are derived from the same :class:`ParamSpec` records.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from weather_mcp.protocols.errors import InvalidParamsError

_JSON_SCHEMA_KEYS = {
    "min_length": "minLength",
    "max_length": "maxLength",
    "minimum": "minimum",
    "maximum": "maximum",
}


class ParamSpec(BaseModel):
    """Type and constraints for a single tool parameter."""

    model_config = ConfigDict(frozen=True)

    type: Literal["string", "number"]
    description: str = ""
    required: bool = True
    min_length: int | None = None
    max_length: int | None = None
    minimum: int | float | None = None
    maximum: int | float | None = None

    def to_json_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": self.type}
        for field, key in _JSON_SCHEMA_KEYS.items():
            value = getattr(self, field)
            if value is not None:
                schema[key] = value
        if self.description:
            schema["description"] = self.description
        return schema

    def check(self, name: str, value: Any) -> Any:
        """Return *value* if it satisfies this spec, else raise."""
        if self.type == "string":
            if not isinstance(value, str):
                raise InvalidParamsError(f"Invalid parameter {name}: expected string")
            if self.min_length is not None and len(value) < self.min_length:
                raise InvalidParamsError(
                    f"Invalid parameter {name}: must be at least {self.min_length} characters"
                )
            if self.max_length is not None and len(value) > self.max_length:
                raise InvalidParamsError(
                    f"Invalid parameter {name}: must be at most {self.max_length} characters"
                )
            return value

        # bool is an int subclass but not a JSON number
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidParamsError(f"Invalid parameter {name}: expected number")
        if value != value:  # NaN
            raise InvalidParamsError(f"Invalid parameter {name}: expected number")
        if self.minimum is not None and value < self.minimum:
            raise InvalidParamsError(
                f"Invalid parameter {name}: must be greater than or equal to {_fmt(self.minimum)}"
            )
        if self.maximum is not None and value > self.maximum:
            raise InvalidParamsError(
                f"Invalid parameter {name}: must be less than or equal to {_fmt(self.maximum)}"
            )
        return value


class ArgumentSchema(BaseModel):
    """Mapping of parameter name to :class:`ParamSpec`, in declaration order."""

    model_config = ConfigDict(frozen=True)

    params: dict[str, ParamSpec] = Field(default_factory=dict)

    def to_json_schema(self) -> dict[str, Any]:
        """Render as a JSON Schema object for ``inputSchema``."""
        return {
            "type": "object",
            "properties": {name: spec.to_json_schema() for name, spec in self.params.items()},
            "required": [name for name, spec in self.params.items() if spec.required],
        }

    def validate_arguments(self, arguments: dict[str, Any]) -> dict[str, Any]:
        """Check *arguments* against every declared parameter.

        Returns only the declared parameters that were supplied; undeclared
        keys are dropped.

        Raises:
            InvalidParamsError: On a missing required parameter or a value
                of the wrong type or out of range.
        """
        validated: dict[str, Any] = {}
        for name, spec in self.params.items():
            value = arguments.get(name)
            if value is None:
                if spec.required:
                    raise InvalidParamsError(f"Missing required parameter: {name}")
                continue
            validated[name] = spec.check(name, value)
        return validated


def _fmt(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)
