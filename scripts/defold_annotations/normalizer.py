# Type normalization shared by both annotation dialects
from typing import Iterable, List, NamedTuple, Optional, Sequence, Set, Tuple, Union

from .config import DialectConfig, GeneratorConfig

RawTypes = Union[str, Sequence[str]]

FUNCTION_PREFIX = "function("


class TypeContext(NamedTuple):
    elementName: str = ""
    paramName: str = ""
    isReturn: bool = False
    isOptional: bool = False


def splitUnion(types: RawTypes) -> List[str]:
    """Split `a|b` alternatives, leaving pipes inside parentheses alone"""
    if isinstance(types, str):
        types = [types]

    result: List[str] = []
    for value in types:
        depth = 0
        current = ""
        for char in value:
            if char == "(":
                depth += 1
            elif char == ")":
                depth = max(depth - 1, 0)

            if char == "|" and depth == 0:
                result.append(current)
                current = ""
            else:
                current += char
        result.append(current)

    return [value.strip() for value in result if value.strip() != ""]


def splitArraySuffix(type: str) -> Tuple[str, int]:
    depth = 0
    while type.endswith("[]"):
        type = type[:-2]
        depth += 1
    return type, depth


class TypeNormalizer:
    def __init__(self, config: GeneratorConfig, dialect: DialectConfig):
        self.dialect = dialect
        self.knownTypes: Set[str] = set(config.knownTypes)
        self.knownTypes.update(config.knownClasses.keys())
        self.knownTypes.update(config.knownAliases.keys())

    def isKnown(self, type: str) -> bool:
        return type in self.knownTypes or type.startswith(FUNCTION_PREFIX)

    def wrapArray(self, type: str, depth: int) -> str:
        for _ in range(depth):
            type = self.dialect.arrayFormat % type
        return type

    def rewriteFunction(self, type: str) -> str:
        if type == "function()":
            type = "function"
        if type.startswith(FUNCTION_PREFIX):
            type = self.dialect.callableKeyword + type[len("function") :]
        return type

    def localOverride(self, raw: str, context: TypeContext) -> Optional[str]:
        replacements = self.dialect.localTypeReplacements.get(context.elementName)
        if not replacements:
            return None
        kind = "return" if context.isReturn else "param"
        return replacements.get(f"{kind}_{raw}_{context.paramName}")

    def resolveAlternative(self, raw: str, context: TypeContext) -> Iterable[str]:
        override = self.localOverride(raw, context)
        if override is not None:
            for type in splitUnion(override):
                base, depth = splitArraySuffix(type)
                yield self.wrapArray(self.rewriteFunction(base), depth)
            return

        base, depth = splitArraySuffix(raw)
        replacement = self.dialect.typeReplacements.get(base, base)

        for type in splitUnion(replacement):
            inner, innerDepth = splitArraySuffix(type)

            if self.dialect.enforceKnownTypes and not self.isKnown(inner):
                inner = self.dialect.unknownType
            else:
                inner = self.rewriteFunction(inner)

            yield self.wrapArray(inner, depth + innerDepth)

    def fuseUserdata(self, types: Set[str]):
        userdata = [t for t in self.dialect.userdataTypes if t in types]
        if len(userdata) > 1:
            types.difference_update(userdata)
            types.add("any")

    def normalize(self, rawTypes: RawTypes, context: TypeContext = TypeContext()) -> str:
        types: Set[str] = set()
        for raw in splitUnion(rawTypes):
            types.update(self.resolveAlternative(raw, context))

        self.fuseUserdata(types)

        nilType = self.dialect.nilType
        if context.isOptional and nilType is not None:
            types.add(nilType)

        result = "|".join(sorted(types))
        return result if result != "" else self.dialect.unknownType
