# Shapes of the parsed documentation and of the intermediate structures
from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, TypedDict, Union

ElementType = Union[
    Literal["FUNCTION"],
    Literal["VARIABLE"],
    Literal["BASIC_CLASS"],
    Literal["BASIC_ALIAS"],
    Literal["PROPERTY"],
    Literal["MESSAGE"],
]

Parameter = TypedDict(
    "Parameter",
    {
        "name": str,  # "[name]" when optional, "name..." when variadic
        "doc": str,
        "types": List[str],
    },
)

Operator = TypedDict(
    "Operator",
    {
        "param": Optional[str],
        "result": str,
    },
    total=False,
)

Element = TypedDict(
    "Element",
    {
        "type": ElementType,
        "name": str,
        "description": str,
        "parameters": List[Parameter],
        "returnvalues": List[Parameter],
        "fields": Dict[str, Union[str, bool]],  # field name -> "type comment"
        "operators": Dict[str, Operator],
        "alias": str,
    },
    total=False,
)

Module = TypedDict(
    "Module",
    {
        "namespace": str,
        "brief": str,
        "description": Optional[str],
        "elements": List[Element],
    },
)


@dataclass
class ElementGroup:
    """A namespace level of the declaration tree, owning its subgroups."""

    name: str
    elements: List[Element] = field(default_factory=list)
    groups: Dict[str, "ElementGroup"] = field(default_factory=dict)


@dataclass
class NormalizedParam:
    name: str  # Empty for unnamed return values
    isOptional: bool
    types: str  # Pipe-joined and sorted
