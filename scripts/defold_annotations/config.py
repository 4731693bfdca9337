# Configuration tables for both annotation dialects
# The module-level tables are the defaults, `defaultConfig()` builds fresh copies
# of them so a run can be corrected without touching these constants.
import copy
import json
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

GENERATOR_URL = "github.com/astrochili/defold-annotations"
VERSION_URL = "https://d.defold.com/stable/info.json"
DOCS_URL = "https://github.com/defold/defold/releases/download/{version}/ref-doc.zip"
API_FOLDER = "api"

# Lua Language Server diagnostics disabled at the top of every generated file
DISABLED_DIAGNOSTICS = [
    "lowercase-global",
    "missing-return",
    "duplicate-doc-param",
    "duplicate-set-field",
    "args-after-dots",
]

KNOWN_TYPES = [
    "nil",
    "any",
    "boolean",
    "number",
    "integer",
    "string",
    "table",
    "function",
    "userdata",
    "lightuserdata",
    "thread",
]

# Classes declared in the "meta" module, fields are "type comment" strings
KNOWN_CLASSES: Dict[str, dict] = {
    "vector3": {
        "fields": {
            "x": "number",
            "y": "number",
            "z": "number",
        },
        "operators": {
            "add": {"param": "vector3", "result": "vector3"},
            "sub": {"param": "vector3", "result": "vector3"},
            "mul": {"param": "number", "result": "vector3"},
            "div": {"param": "number", "result": "vector3"},
            "unm": {"result": "vector3"},
        },
    },
    "vector4": {
        "fields": {
            "x": "number",
            "y": "number",
            "z": "number",
            "w": "number",
        },
        "operators": {
            "add": {"param": "vector4", "result": "vector4"},
            "sub": {"param": "vector4", "result": "vector4"},
            "mul": {"param": "number", "result": "vector4"},
            "div": {"param": "number", "result": "vector4"},
            "unm": {"result": "vector4"},
        },
    },
    "quaternion": {
        "fields": {
            "x": "number",
            "y": "number",
            "z": "number",
            "w": "number",
        },
        "operators": {
            "mul": {"param": "quaternion", "result": "quaternion"},
        },
    },
    "matrix4": {
        "fields": {
            "c0": "vector4",
            "c1": "vector4",
            "c2": "vector4",
            "c3": "vector4",
        },
        "operators": {
            "mul": {"param": "matrix4", "result": "matrix4"},
        },
    },
    "url": {
        "fields": {
            "socket": "hash",
            "path": "hash",
            "fragment": "hash",
        },
    },
    "on_input.action": {
        "fields": {
            "value": "number The amount of input given by the user",
            "pressed": "boolean If the input was pressed this frame",
            "released": "boolean If the input was released this frame",
            "repeated": "boolean If the input was repeated this frame",
            "x": "number The x value of a pointer device, if present",
            "y": "number The y value of a pointer device, if present",
            "screen_x": "number The screen space x value of a pointer device, if present",
            "screen_y": "number The screen space y value of a pointer device, if present",
            "dx": "number The change in x value of a pointer device, if present",
            "dy": "number The change in y value of a pointer device, if present",
            "gamepad": "integer The index of the gamepad device that provided the input",
            "touch": "on_input.touch[] List of touch input, one element per finger, if present",
            "text": "string The text entered with the text action, if present",
        },
    },
    "on_input.touch": {
        "fields": {
            "id": "number A number identifying the touch input during its duration",
            "pressed": "boolean True if the finger was pressed this frame",
            "released": "boolean True if the finger was released this frame",
            "tap_count": "integer Number of taps, one for single, two for double-tap, etc",
            "x": "number The x touch location",
            "y": "number The y touch location",
            "dx": "number The change in x value",
            "dy": "number The change in y value",
        },
    },
}

KNOWN_ALIASES: Dict[str, str] = {
    "array": "table",
    "bool": "boolean",
    "float": "number",
    "hash": "userdata",
    "constant": "userdata",
    "node": "userdata",
    "constant_buffer": "userdata",
    "render_predicate": "userdata",
    "render_target": "string|userdata",
    "resource_handle": "number|userdata",
    "buffer_stream": "userdata",
    "buffer_data": "userdata",
    "socket_client": "userdata",
    "socket_master": "userdata",
    "socket_unconnected": "userdata",
}

# Raw names that can't be used as Lua identifiers
NAME_REPLACEMENTS: Dict[str, str] = {
    "repeat": "repeating",
    "function": "func",
    "end": "finish",
    "local": "is_local",
    "and": "and_",
    "or": "or_",
    "not": "not_",
    "in": "in_",
    "then": "then_",
    "if": "if_",
    "else": "else_",
    "elseif": "elseif_",
    "for": "for_",
    "while": "while_",
    "do": "do_",
    "until": "until_",
    "return": "return_",
    "break": "break_",
    "goto": "goto_",
    "nil": "nil_",
    "true": "true_",
    "false": "false_",
}

LOCAL_NAME_REPLACEMENTS: Dict[str, Dict[str, str]] = {
    "go.property": {
        "param_value": "default",
    },
}

LUA_TYPE_REPLACEMENTS: Dict[str, str] = {
    "bool": "boolean",
    "float": "number",
    "double": "number",
    "int": "integer",
    "array": "table",
    "object": "table",
    "vmath.vector3": "vector3",
    "vmath.vector4": "vector4",
    "vmath.quaternion": "quaternion",
    "vmath.matrix4": "matrix4",
    "resource": "hash",
    "handle": "number",
}

TEAL_TYPE_REPLACEMENTS: Dict[str, str] = {
    "bool": "boolean",
    "float": "number",
    "double": "number",
    "int": "integer",
    "array": "{any}",
    "table": "{any:any}",
    "object": "{any:any}",
    "vmath.vector3": "vector3",
    "vmath.vector4": "vector4",
    "vmath.quaternion": "quaternion",
    "vmath.matrix4": "matrix4",
    "function(self, url, property)": "function(self, url, hash)",
    "resource": "hash",
    "handle": "number",
}

LOCAL_TYPE_REPLACEMENTS: Dict[str, Dict[str, str]] = {
    "sys.load_resource": {
        "return_string_data": "string|nil",
    },
}

# Functions whose whole parameter/return type turns into `T` when it repeats
LUA_GENERICS: Dict[str, str] = {
    "vmath.lerp": "vector3|vector4",
    "vmath.slerp": "quaternion|vector3|vector4",
}

TEAL_GENERICS: Dict[str, str] = {
    "vmath.lerp": "any",
    "vmath.slerp": "any",
}

# Script lifecycle callbacks are documented as functions but never declared
IGNORED_FUNCS = [
    "init",
    "final",
    "update",
    "fixed_update",
    "on_message",
    "on_input",
    "on_reload",
]

USERDATA_TYPES = ["vector3", "vector4", "quaternion", "hash", "url", "constant"]

TEAL_ALLOWED_NAMESPACES = ["meta"]

TEAL_REMOVED_NAMES: Dict[str, List[str]] = {
    "meta": [
        "array",
        "bool",
        "float",
        "render_target",
        "resource_handle",
    ],
}


@dataclass
class PatchRules:
    """Which modules and elements a dialect keeps before grouping."""

    allowedNamespaces: Optional[Set[str]] = None  # None keeps every namespace
    removedPrefixes: List[str] = field(default_factory=list)
    dropGlobalClasses: bool = False
    removedNames: Dict[str, Set[str]] = field(default_factory=dict)


@dataclass
class DialectConfig:
    name: str
    unknownType: str = "any"
    enforceKnownTypes: bool = False
    arrayFormat: str = "%s[]"
    callableKeyword: str = "function"
    nilType: Optional[str] = "nil"
    userdataTypes: List[str] = field(default_factory=list)
    typeReplacements: Dict[str, str] = field(default_factory=dict)
    localTypeReplacements: Dict[str, Dict[str, str]] = field(default_factory=dict)
    nameReplacements: Dict[str, str] = field(default_factory=dict)
    localNameReplacements: Dict[str, Dict[str, str]] = field(default_factory=dict)
    generics: Dict[str, str] = field(default_factory=dict)
    ignoredFuncs: List[str] = field(default_factory=list)
    patch: PatchRules = field(default_factory=PatchRules)


@dataclass
class GeneratorConfig:
    lua: DialectConfig
    teal: DialectConfig
    knownTypes: List[str] = field(default_factory=list)
    knownClasses: Dict[str, dict] = field(default_factory=dict)
    knownAliases: Dict[str, str] = field(default_factory=dict)
    disabledDiagnostics: List[str] = field(default_factory=list)
    apiFolder: str = API_FOLDER
    generatorUrl: str = GENERATOR_URL
    versionUrl: str = VERSION_URL
    docsUrl: str = DOCS_URL


def defaultConfig() -> GeneratorConfig:
    lua = DialectConfig(
        name="lua",
        enforceKnownTypes=True,
        arrayFormat="%s[]",
        callableKeyword="fun",
        nilType="nil",
        typeReplacements=dict(LUA_TYPE_REPLACEMENTS),
        localTypeReplacements=copy.deepcopy(LOCAL_TYPE_REPLACEMENTS),
        nameReplacements=dict(NAME_REPLACEMENTS),
        localNameReplacements=copy.deepcopy(LOCAL_NAME_REPLACEMENTS),
        generics=dict(LUA_GENERICS),
        ignoredFuncs=list(IGNORED_FUNCS),
    )

    # Teal marks optional parameters with `?:` so no nil is injected
    teal = DialectConfig(
        name="teal",
        enforceKnownTypes=False,
        arrayFormat="{%s}",
        callableKeyword="function",
        nilType=None,
        userdataTypes=list(USERDATA_TYPES),
        typeReplacements=dict(TEAL_TYPE_REPLACEMENTS),
        localTypeReplacements=copy.deepcopy(LOCAL_TYPE_REPLACEMENTS),
        nameReplacements=dict(NAME_REPLACEMENTS),
        localNameReplacements=copy.deepcopy(LOCAL_NAME_REPLACEMENTS),
        generics=dict(TEAL_GENERICS),
        ignoredFuncs=list(IGNORED_FUNCS),
        patch=PatchRules(
            allowedNamespaces=set(TEAL_ALLOWED_NAMESPACES),
            removedPrefixes=["editor"],
            dropGlobalClasses=True,
            removedNames={
                namespace: set(names) for namespace, names in TEAL_REMOVED_NAMES.items()
            },
        ),
    )

    return GeneratorConfig(
        lua=lua,
        teal=teal,
        knownTypes=list(KNOWN_TYPES),
        knownClasses=copy.deepcopy(KNOWN_CLASSES),
        knownAliases=dict(KNOWN_ALIASES),
        disabledDiagnostics=list(DISABLED_DIAGNOSTICS),
    )


def applyDialectCorrections(dialect: DialectConfig, corrections: dict):
    for key, target in (
        ("type_replacements", dialect.typeReplacements),
        ("name_replacements", dialect.nameReplacements),
        ("generics", dialect.generics),
    ):
        if key in corrections:
            target.update(corrections[key])

    for key, target in (
        ("local_type_replacements", dialect.localTypeReplacements),
        ("local_name_replacements", dialect.localNameReplacements),
    ):
        for elementName, replacements in corrections.get(key, {}).items():
            target.setdefault(elementName, {}).update(replacements)

    if "ignored_funcs" in corrections:
        dialect.ignoredFuncs += corrections["ignored_funcs"]
    if "unknown_type" in corrections:
        dialect.unknownType = corrections["unknown_type"]

    if "allowed_namespaces" in corrections:
        allowed = corrections["allowed_namespaces"]
        dialect.patch.allowedNamespaces = None if allowed is None else set(allowed)
    if "removed_prefixes" in corrections:
        dialect.patch.removedPrefixes = list(corrections["removed_prefixes"])
    for namespace, names in corrections.get("removed_names", {}).items():
        dialect.patch.removedNames.setdefault(namespace, set()).update(names)


def applyCorrections(config: GeneratorConfig, corrections: dict):
    """Merge a corrections document into the configuration in place"""
    if "known_types" in corrections:
        config.knownTypes += [
            t for t in corrections["known_types"] if t not in config.knownTypes
        ]
    if "known_classes" in corrections:
        config.knownClasses.update(corrections["known_classes"])
    if "known_aliases" in corrections:
        config.knownAliases.update(corrections["known_aliases"])
    if "disabled_diagnostics" in corrections:
        config.disabledDiagnostics = list(corrections["disabled_diagnostics"])
    if "api_folder" in corrections:
        config.apiFolder = corrections["api_folder"]

    for dialectName in ("lua", "teal"):
        if dialectName in corrections:
            applyDialectCorrections(
                getattr(config, dialectName), corrections[dialectName]
            )


def loadConfig(correctionsPath: Optional[str] = None) -> GeneratorConfig:
    config = defaultConfig()

    if correctionsPath is not None:
        with open(correctionsPath, "r") as file:
            corrections = json.load(file)
        applyCorrections(config, corrections)

    return config
