# Filtering of parsed modules and grouping of dotted names into nested namespaces
from typing import Callable, Dict, Iterable, List, Tuple, TypeVar

from .config import PatchRules
from .schema import Element, ElementGroup, Module

T = TypeVar("T")


def sortedItems(mapping: Dict[str, T]) -> List[Tuple[str, T]]:
    return [(key, mapping[key]) for key in sorted(mapping)]


def removeElements(module: Module, match: Callable[[Element], bool]) -> Module:
    return {**module, "elements": [e for e in module["elements"] if not match(e)]}


def isGlobalClass(element: Element) -> bool:
    fields = element.get("fields")
    return fields is not None and fields.get("is_global") is True


class Classifier:
    def __init__(self, rules: PatchRules):
        self.rules = rules

    def patchModule(self, module: Module) -> Module:
        """Copy of the module with the elements this dialect can't declare removed"""
        namespace = module["namespace"]
        allowed = self.rules.allowedNamespaces

        if allowed is not None and namespace not in allowed:
            return {**module, "elements": []}

        prefixes = tuple(self.rules.removedPrefixes)
        if prefixes:
            module = removeElements(module, lambda e: e["name"].startswith(prefixes))

        if self.rules.dropGlobalClasses:
            # Declared elsewhere already
            module = removeElements(module, isGlobalClass)

        removed = self.rules.removedNames.get(namespace)
        if removed:
            module = removeElements(module, lambda e: e["name"] in removed)

        return module

    def patchModules(self, modules: Iterable[Module]) -> List[Module]:
        return [self.patchModule(module) for module in modules]

    def siftElement(self, group: ElementGroup, element: Element):
        """Put the element into the subgroup named by its first dotted segment"""
        name = element["name"]
        index = name.find(".")

        if index == -1:
            group.elements.append(element)
            return

        groupName = name[:index]
        subgroup = group.groups.get(groupName)
        if subgroup is None:
            subgroup = ElementGroup(name=groupName)
            group.groups[groupName] = subgroup

        self.siftElement(subgroup, {**element, "name": name[index + 1 :]})

    def classify(self, modules: Iterable[Module]) -> ElementGroup:
        root = ElementGroup(name="")
        for module in self.patchModules(modules):
            for element in module["elements"]:
                self.siftElement(root, element)
        return root
