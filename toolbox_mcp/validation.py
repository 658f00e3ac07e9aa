"""
Argument validation for tools and prompts.

Each operation declares its input as a pydantic model. The model's JSON
schema is what gets published to clients, and `validate_arguments` turns
the raw argument mapping of a call into an instance of that model.

Policy shared by every model deriving from `ToolInput`:
- unknown fields are rejected;
- values are not coerced across types (a string is never a number);
- defaults only fill fields that are absent, an invalid value always fails.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class ToolInput(BaseModel):
    """Base class for tool and prompt argument models."""

    model_config = ConfigDict(extra="forbid", strict=True, frozen=True)


class ToolInputError(ValueError):
    """Raised when call arguments do not satisfy the declared schema."""

    def __init__(self, operation: str, problems: List[Tuple[str, str]]) -> None:
        self.operation = operation
        self.problems = problems
        details = "; ".join(f"{field}: {message}" for field, message in problems)
        super().__init__(f"Invalid arguments for '{operation}': {details}")


def _field_path(loc: Tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc) or "<root>"


def validate_arguments(
    operation: str,
    model: Type[ModelT],
    arguments: Optional[Mapping[str, Any]],
) -> ModelT:
    """
    Validate raw `arguments` against `model`.

    Missing arguments are treated as an empty mapping, so a call that omits
    them still receives declared defaults.
    """
    raw: Dict[str, Any] = dict(arguments or {})
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        problems = [(_field_path(err["loc"]), err["msg"]) for err in exc.errors()]
        raise ToolInputError(operation, problems) from exc


def input_schema(model: Type[BaseModel]) -> Dict[str, Any]:
    """JSON schema published for `model`, keyed by alias."""
    return model.model_json_schema(by_alias=True)
