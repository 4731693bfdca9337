from dataclasses import replace
from typing import List, Optional, Tuple

from .config import DialectConfig
from .normalizer import TypeContext, TypeNormalizer
from .schema import NormalizedParam, Parameter

VARIADIC = "..."
GENERIC_NAME = "T"


class NameResolver:
    def __init__(self, dialect: DialectConfig):
        self.dialect = dialect

    def resolve(self, rawName: str, isReturn: bool, elementName: str) -> Tuple[str, bool]:
        """Turn a documented name into an identifier and an optional flag"""
        name = rawName
        isOptional = False

        if len(name) >= 2 and name[0] == "[" and name[-1] == "]":
            isOptional = True
            name = name[1:-1]

        if name.endswith(VARIADIC):
            name = VARIADIC

        kind = "return" if isReturn else "param"
        localReplacements = self.dialect.localNameReplacements.get(elementName, {})
        local = localReplacements.get(f"{kind}_{name}")

        if local is not None:
            name = local
        else:
            name = self.dialect.nameReplacements.get(name, name)

        return name.replace("-", "_"), isOptional


def applyGeneric(
    params: List[NormalizedParam], generic: Optional[str]
) -> Tuple[List[NormalizedParam], bool]:
    """Swap a type repeated across the signature for the generic placeholder"""
    if generic is None:
        return params, False

    occurrences = sum(1 for param in params if param.types == generic)
    if occurrences < 2:
        return params, False

    return [
        replace(param, types=GENERIC_NAME) if param.types == generic else param
        for param in params
    ], True


def normalizeParam(
    parameter: Parameter,
    isReturn: bool,
    elementName: str,
    resolver: NameResolver,
    normalizer: TypeNormalizer,
) -> NormalizedParam:
    name, isOptional = resolver.resolve(parameter["name"], isReturn, elementName)
    context = TypeContext(elementName, name, isReturn, isOptional)
    types = normalizer.normalize(parameter.get("types") or [], context)
    return NormalizedParam(name=name, isOptional=isOptional, types=types)
