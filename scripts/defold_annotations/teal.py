# Teal declarations, every namespace nested into a single defold.d.tl file
import os
from typing import List, Optional, Union

from .classifier import Classifier, sortedItems
from .config import GeneratorConfig
from .names import GENERIC_NAME, VARIADIC, NameResolver, applyGeneric, normalizeParam
from .normalizer import TypeContext, TypeNormalizer
from .output import saveFileLines
from .schema import Element, ElementGroup, Module, NormalizedParam
from .text import decodeText, makeComment, splitTypeComment

# Nested lists are indented one level deeper than their parent
Content = List[Union[str, "Content"]]

TYPE_ORDER = {
    "BASIC_CLASS": 1,
    "BASIC_ALIAS": 2,
    "VARIABLE": 3,
    "FUNCTION": 4,
    "PROPERTY": 0,
    "MESSAGE": 0,
}

API_FILE = "defold.d.tl"


def contentStringify(content: Content, prefix: str = "") -> List[str]:
    result: List[str] = []
    for line in content:
        if isinstance(line, str):
            result.append(prefix + line if line != "" else line)
        else:
            result += contentStringify(line, prefix + "\t")
    return result


def globalize(content: Content) -> Content:
    """Make every top-level declaration global"""
    result: Content = []
    for line in content:
        if isinstance(line, str) and line != "" and not line.startswith("--") and line != "end":
            line = "global " + line
        result.append(line)
    return result


def qualify(path: List[str], name: str) -> str:
    return ".".join(path + [name])


def commentLines(text: Optional[str]) -> List[str]:
    if decodeText(text).strip() == "":
        return []
    return makeComment(text, "-- ").split("\n")


class TealGenerator:
    def __init__(self, config: GeneratorConfig):
        self.config = config
        self.dialect = config.teal
        self.normalizer = TypeNormalizer(config, self.dialect)
        self.resolver = NameResolver(self.dialect)
        self.classifier = Classifier(self.dialect.patch)
        self.makers = {
            "FUNCTION": self.makeFunc,
            "VARIABLE": self.makeConst,
            "BASIC_CLASS": self.makeClass,
            "BASIC_ALIAS": self.makeAlias,
        }

    def makeGlobalHeader(self, defoldVersion: str) -> Content:
        return [
            "--[[",
            f"  Generated with {self.config.generatorUrl}",
            f"  Defold {defoldVersion}",
            "--]]",
            "",
        ]

    def convertType(self, rawType: str, owner: str, name: str) -> str:
        return self.normalizer.normalize(rawType, TypeContext(owner, name))

    def makeConst(self, element: Element, fullName: str, isRoot: bool) -> Content:
        return commentLines(element.get("description")) + [
            f"{element['name']}: {self.dialect.unknownType}"
        ]

    def paramToString(self, param: NormalizedParam, skipName: bool = False) -> str:
        if skipName:
            return f"{param.types}..." if param.name == VARIADIC else param.types
        if param.isOptional and param.name != VARIADIC:
            return f"{param.name}?: {param.types}"
        return f"{param.name}: {param.types}"

    def makeFunc(self, element: Element, fullName: str, isRoot: bool) -> Optional[Content]:
        if fullName in self.dialect.ignoredFuncs:
            return None

        params = [
            normalizeParam(p, False, fullName, self.resolver, self.normalizer)
            for p in element.get("parameters") or []
        ]
        returns = [
            normalizeParam(r, True, fullName, self.resolver, self.normalizer)
            for r in element.get("returnvalues") or []
        ]

        generic = self.dialect.generics.get(fullName)
        signature, isGeneric = applyGeneric(params + returns, generic)
        params, returns = signature[: len(params)], signature[len(params) :]

        content = commentLines(element.get("description"))
        typeParams = ""
        if isGeneric:
            content.append(f"-- {GENERIC_NAME}: {generic}")
            typeParams = f"<{GENERIC_NAME}>"

        arguments = ", ".join(self.paramToString(param) for param in params)
        results = [self.paramToString(ret, skipName=True) for ret in returns]

        signatureText = f"({arguments})"
        if len(results) == 1:
            signatureText += f": {results[0]}"
        elif len(results) > 1:
            signatureText += f": ({', '.join(results)})"

        name = element["name"]
        if isRoot:
            content.append(f"function {name}{typeParams}{signatureText}")
        else:
            content.append(f"{name}: function{typeParams}{signatureText}")

        return content

    def makeAlias(self, element: Element, fullName: str, isRoot: bool) -> Content:
        name = element["name"]
        if element["alias"] == "userdata":
            return [f"record {name} is userdata end"]
        alias = self.convertType(element["alias"], fullName, name)
        return [f"type {name} = {alias}"]

    def makeClass(self, element: Element, fullName: str, isRoot: bool) -> Content:
        name = element["name"]
        assert "fields" in element, f"Class {fullName} has no fields"

        contentFields: Content = []
        for fieldName, raw in sortedItems(element["fields"]):
            if not isinstance(raw, str):
                continue
            rawType, comment = splitTypeComment(raw)
            if comment != "":
                contentFields += commentLines(comment)
            contentFields.append(f"{fieldName}: {self.convertType(rawType, fullName, fieldName)}")

        contentOperators: Content = []
        for operatorName, operator in sortedItems(element.get("operators") or {}):
            params = [name]
            if operator.get("param"):
                params.append(self.convertType(operator["param"], fullName, operatorName))
            result = self.convertType(operator["result"], fullName, operatorName)
            contentOperators.append(
                f"metamethod __{operatorName}: function({', '.join(params)}): {result}"
            )

        return [
            "",
            f"record {name} is userdata",
            contentFields,
            contentOperators,
            "end",
        ]

    def generateGroup(self, group: ElementGroup, path: List[str]) -> Content:
        isRoot = len(path) == 0
        elements = sorted(
            group.elements, key=lambda e: (TYPE_ORDER.get(e["type"], 0), e["name"])
        )

        content: Content = []
        merged = set()
        for element in elements:
            maker = self.makers.get(element["type"])
            if maker is None:
                continue
            name = element["name"]
            subContent = maker(element, qualify(path, name), isRoot)
            if subContent is None:
                continue

            # A record can be declared once, so a class owns its namesake group
            if element["type"] == "BASIC_CLASS" and name in group.groups:
                subContent.insert(-1, self.generateGroup(group.groups[name], path + [name]))
                merged.add(name)

            content += subContent

        for subgroupName, subgroup in sortedItems(group.groups):
            if subgroupName in merged:
                continue
            content += [
                "",
                f"record {subgroupName}",
                self.generateGroup(subgroup, path + [subgroupName]),
                "end",
            ]

        return content

    def renderApi(self, modules: List[Module], defoldVersion: str) -> List[str]:
        root = self.classifier.classify(modules)
        content = self.generateGroup(root, [])
        return contentStringify(self.makeGlobalHeader(defoldVersion)) + contentStringify(
            globalize(content)
        )

    def generateApi(self, modules: List[Module], defoldVersion: str) -> str:
        print("-- Teal Annotations Generation")

        apiPath = os.path.join(self.config.apiFolder, API_FILE)
        saveFileLines(self.renderApi(modules, defoldVersion), apiPath)

        print("-- Teal Annotations Generated Successfully!\n")
        return apiPath
