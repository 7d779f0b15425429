"""Parameter schemas for Exploro tools.

Static tools declare pydantic models directly; external tools describe
their arguments declaratively and get a model built at load time.

Manifest entry shape:
    {"id": ..., "name": ..., "description": ..., "prompt": "... {arg} ...",
     "args": [{"name": ..., "type": "string" | "number" | "array",
               "description": ...}]}
"""

import re
from enum import Enum
from typing import Annotated, Any, Dict, List, Optional, Tuple, Type, Union

import httpx
from pydantic import (
    AfterValidator,
    BeforeValidator,
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    WithJsonSchema,
    create_model,
    model_validator,
)

from exploro_mcp.errors import UnsupportedArgumentType


def _positive(value: Union[int, float]) -> Union[int, float]:
    if value <= 0:
        raise ValueError("must be greater than 0")
    return value


def _day_index(value: Union[int, float]) -> Union[int, float]:
    if not 0 <= value <= 6:
        raise ValueError("must be between 0 and 6")
    return value


def _require_url(value: str) -> str:
    try:
        url = httpx.URL(value)
    except httpx.InvalidURL as e:
        raise ValueError(f"must be a valid URL: {e}") from e
    if not url.scheme or not url.host:
        raise ValueError("must be a valid URL")
    return value


# JSON numbers keep their kind: 30 stays an int, 1.5 stays a float.
Number = Annotated[
    Union[StrictInt, StrictFloat],
    WithJsonSchema({"type": "number"}),
]

PositiveNumber = Annotated[
    Union[StrictInt, StrictFloat],
    AfterValidator(_positive),
    WithJsonSchema({"type": "number", "exclusiveMinimum": 0}),
]

DayIndex = Annotated[
    Union[StrictInt, StrictFloat],
    AfterValidator(_day_index),
    WithJsonSchema({"type": "number", "minimum": 0, "maximum": 6}),
]

UrlStr = Annotated[
    str,
    AfterValidator(_require_url),
    WithJsonSchema({"type": "string", "format": "uri"}),
]

# Registry entries may send "description": null.
Description = Annotated[str, BeforeValidator(lambda value: "" if value is None else value)]


class EmptyParams(BaseModel):
    """Parameters for tools that take no arguments."""


class ArgumentType(str, Enum):
    """Argument kinds an external tool may declare."""

    STRING = "string"
    NUMBER = "number"
    ARRAY = "array"


class ArgumentSpec(BaseModel):
    """One named parameter of an external tool."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    # Kept as a plain string so unknown kinds fail at field construction
    # with UnsupportedArgumentType rather than at manifest parsing.
    type: str
    description: Description = ""


class ExternalToolDescriptor(BaseModel):
    """A tool definition fetched from the external registry."""

    model_config = ConfigDict(frozen=True)

    id: Any = None
    name: str = Field(..., min_length=1)
    description: Description = ""
    prompt: str
    args: Optional[List[ArgumentSpec]] = None

    @model_validator(mode="after")
    def unique_argument_names(self):
        names = [arg.name for arg in self.args or []]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"duplicate argument names: {', '.join(duplicates)}")
        return self


def argument_field(spec: ArgumentSpec) -> Tuple[Any, Any]:
    """Map an ArgumentSpec to a (annotation, FieldInfo) pair for create_model.

    Raises:
        UnsupportedArgumentType: type is not string, number or array
    """
    try:
        arg_type = ArgumentType(spec.type)
    except ValueError:
        raise UnsupportedArgumentType(spec.type, spec.name) from None

    if arg_type is ArgumentType.ARRAY:
        annotation: Any = List[str]
    elif arg_type is ArgumentType.NUMBER:
        annotation = Number
    elif arg_type is ArgumentType.STRING:
        annotation = str
    else:
        raise UnsupportedArgumentType(spec.type, spec.name)

    return annotation, Field(..., alias=spec.name, description=spec.description or None)


def build_parameter_model(descriptor: ExternalToolDescriptor) -> Type[BaseModel]:
    """Build the runtime parameter model for an external tool.

    Fields are stored under positional names and exposed through aliases,
    so argument names that collide with BaseModel attributes still work.
    Dump with by_alias=True to get the declared names back.
    """
    fields: Dict[str, Any] = {}
    for index, spec in enumerate(descriptor.args or []):
        fields[f"arg_{index}"] = argument_field(spec)

    model_name = re.sub(r"\W", "_", descriptor.name) + "Params"
    return create_model(model_name, **fields)
