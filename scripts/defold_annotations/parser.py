# Turn the JSON documents of the ref-doc bundle into modules
import json
from typing import Iterable, List, Optional, Tuple

from .schema import Element, Module, Parameter

LANGUAGE = "Lua"


def parseParameter(raw: dict) -> Parameter:
    types = raw.get("types") or []
    if isinstance(types, str):
        types = [types]
    return {
        "name": raw.get("name", ""),
        "doc": raw.get("doc", ""),
        "types": list(types),
    }


def parseElement(raw: dict) -> Element:
    element: Element = {
        "type": raw["type"],
        "name": raw["name"],
        "description": raw.get("description") or raw.get("brief") or "",
        "parameters": [parseParameter(p) for p in raw.get("parameters") or []],
        "returnvalues": [parseParameter(r) for r in raw.get("returnvalues") or []],
    }
    for key in ("fields", "operators", "alias"):
        if key in raw:
            element[key] = raw[key]
    return element


def parseDocument(text: str) -> Optional[Module]:
    """Parse one *_doc.json document, None when it isn't Lua API documentation"""
    document = json.loads(text)
    info = document.get("info") or {}

    if info.get("language", LANGUAGE) != LANGUAGE:
        return None

    namespace = info.get("namespace")
    if not namespace:
        return None

    return {
        "namespace": namespace,
        "brief": info.get("brief", ""),
        "description": info.get("description"),
        "elements": [parseElement(e) for e in document.get("elements") or []],
    }


def parseJson(documents: Iterable[Tuple[str, str]], modules: Optional[List[Module]] = None) -> List[Module]:
    """Append the modules parsed from (file name, json text) pairs"""
    if modules is None:
        modules = []

    for _, text in documents:
        module = parseDocument(text)
        if module is not None:
            modules.append(module)

    return modules
