# The synthetic "meta" module declaring the known classes and aliases
from typing import List

from .config import GeneratorConfig
from .schema import Element, Module

META_NAMESPACE = "meta"
META_BRIEF = "Known types and aliases used in the Defold API"


def makeClass(name: str, declaration: dict) -> Element:
    element: Element = {
        "type": "BASIC_CLASS",
        "name": name,
        "description": "",
        "fields": dict(declaration.get("fields", {})),
    }
    if "operators" in declaration:
        element["operators"] = dict(declaration["operators"])
    return element


def makeAlias(name: str, alias: str) -> Element:
    return {
        "type": "BASIC_ALIAS",
        "name": name,
        "description": "",
        "alias": alias,
    }


def makeModule(config: GeneratorConfig) -> Module:
    elements: List[Element] = []

    for name in sorted(config.knownClasses):
        elements.append(makeClass(name, config.knownClasses[name]))

    for name in sorted(config.knownAliases):
        elements.append(makeAlias(name, config.knownAliases[name]))

    return {
        "namespace": META_NAMESPACE,
        "brief": META_BRIEF,
        "description": None,
        "elements": elements,
    }
