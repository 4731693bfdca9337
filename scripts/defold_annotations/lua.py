# Lua Language Server annotations, one .lua file per namespace
import os
from typing import Dict, List, Optional

from .classifier import Classifier, isGlobalClass, sortedItems
from .config import GeneratorConfig
from .names import GENERIC_NAME, NameResolver, applyGeneric, normalizeParam
from .normalizer import TypeNormalizer
from .output import saveFile
from .schema import Element, Module, NormalizedParam, Parameter
from .text import decodeText, makeComment, makeParamDescription


class LuaGenerator:
    def __init__(self, config: GeneratorConfig):
        self.config = config
        self.dialect = config.lua
        self.normalizer = TypeNormalizer(config, self.dialect)
        self.resolver = NameResolver(self.dialect)
        self.classifier = Classifier(self.dialect.patch)
        self.makers = {
            "FUNCTION": self.makeFunc,
            "VARIABLE": self.makeConst,
            "BASIC_CLASS": self.makeClass,
            "BASIC_ALIAS": self.makeAlias,
        }

    def makeHeader(self, defoldVersion: str, title: str, description: Optional[str]) -> str:
        out = "--[[\n"
        out += f"  Generated with {self.config.generatorUrl}\n"
        out += f"  Defold {defoldVersion}\n\n"
        out += f"  {decodeText(title)}\n"

        if description and description != title:
            out += "\n"
            out += makeComment(description, "  ") + "\n"

        out += "--]]"
        return out

    def makeDisabledDiagnostics(self) -> str:
        lines = ["---@meta"]
        for diagnostic in self.config.disabledDiagnostics:
            lines.append(f"---@diagnostic disable: {diagnostic}")
        return "\n".join(lines)

    def makeNamespace(self, name: str, body: str) -> str:
        out = f"---@class defold_api.{name}\n"
        out += f"{name} = {{}}\n\n"
        out += body + "\n\n"
        out += f"return {name}"
        return out

    def makeConst(self, element: Element) -> str:
        return makeComment(element.get("description")) + "\n" + element["name"] + " = nil"

    def makeParams(self, element: Element, isReturn: bool) -> List[NormalizedParam]:
        key = "returnvalues" if isReturn else "parameters"
        parameters: List[Parameter] = element.get(key) or []
        return [
            normalizeParam(p, isReturn, element["name"], self.resolver, self.normalizer)
            for p in parameters
        ]

    def makeParam(self, param: NormalizedParam, doc: str) -> str:
        description = makeParamDescription(doc)
        return f"---@param {param.name} {param.types} {description}".rstrip()

    def makeReturn(self, param: NormalizedParam, doc: str) -> str:
        parts = [param.types, param.name, makeParamDescription(doc)]
        return "---@return " + " ".join(part for part in parts if part != "")

    def makeFunc(self, element: Element) -> Optional[str]:
        name = element["name"]
        if name in self.dialect.ignoredFuncs:
            return None

        parameters = element.get("parameters") or []
        returnvalues = element.get("returnvalues") or []
        params = self.makeParams(element, False)
        returns = self.makeParams(element, True)

        generic = self.dialect.generics.get(name)
        signature, isGeneric = applyGeneric(params + returns, generic)
        params, returns = signature[: len(params)], signature[len(params) :]

        lines = [makeComment(element.get("description"))]

        if isGeneric:
            lines.append(f"---@generic {GENERIC_NAME}: {generic}")

        for param, parameter in zip(params, parameters):
            lines.append(self.makeParam(param, parameter.get("doc", "")))

        for ret, returnvalue in zip(returns, returnvalues):
            lines.append(self.makeReturn(ret, returnvalue.get("doc", "")))

        paramNames = ", ".join(param.name for param in params)
        lines.append(f"function {name}({paramNames}) end")

        return "\n".join(lines)

    def makeAlias(self, element: Element) -> str:
        return f"---@alias {element['name']} {element['alias']}"

    def makeClass(self, element: Element) -> str:
        name = element["name"]
        assert "fields" in element, f"Class {name} has no fields"
        fields = element["fields"]

        lines = [f"---@class {name}"]

        if isGlobalClass(element):
            lines.append(f"{name} = {{}}")

        for fieldName, fieldType in sortedItems(fields):
            if fieldName == "is_global":
                continue
            lines.append(f"---@field {fieldName} {fieldType}")

        operators = element.get("operators") or {}
        for operatorName, operator in sortedItems(operators):
            param = operator.get("param")
            if param:
                lines.append(f"---@operator {operatorName}({param}): {operator['result']}")
            else:
                lines.append(f"---@operator {operatorName}: {operator['result']}")

        return "\n".join(lines)

    def generateModule(self, module: Module, defoldVersion: str) -> Optional[str]:
        """Make the file content of a module, None when nothing can be declared"""
        namespace = module["namespace"]
        module = self.classifier.patchModule(module)

        elements = [e for e in module["elements"] if e["type"] in self.makers]
        namespaceIsRequired = any(
            e["name"].startswith(namespace) for e in module["elements"]
        )

        elements.sort(key=lambda e: e["name"])
        elements.sort(key=lambda e: e["type"], reverse=True)

        declarations: List[tuple] = []
        for element in elements:
            text = self.makers[element["type"]](element)
            if text is not None:
                declarations.append((element, text))

        if len(declarations) == 0:
            print(f'[-] The module "{namespace}" is skipped because there are no known elements')
            return None

        body = ""
        for index, (element, text) in enumerate(declarations):
            body += text
            if index < len(declarations) - 1:
                body += "\n" if element["type"] == "BASIC_ALIAS" else "\n\n"

        content = self.makeHeader(defoldVersion, module["brief"], module.get("description"))
        content += "\n\n"
        content += self.makeDisabledDiagnostics() + "\n\n"

        if namespaceIsRequired:
            content += self.makeNamespace(namespace, body)
        else:
            content += body

        return content + "\n"

    def generateApi(self, modules: List[Module], defoldVersion: str) -> Dict[str, str]:
        print("-- Annotations Generation")

        written: Dict[str, str] = {}
        for module in modules:
            content = self.generateModule(module, defoldVersion)
            if content is None:
                continue

            apiPath = os.path.join(self.config.apiFolder, module["namespace"] + ".lua")
            saveFile(content, apiPath)
            written[module["namespace"]] = apiPath

        print("-- Annotations Generated Successfully!\n")
        return written
