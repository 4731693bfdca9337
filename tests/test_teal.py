import os

import pytest

from defold_annotations.schema import ElementGroup
from defold_annotations.teal import TealGenerator, contentStringify, globalize

from conftest import makeFunction, makeModule, makeParameter


def allow(config, *namespaces):
    config.teal.patch.allowedNamespaces = set(namespaces)


def test_content_stringify():
    content = ["a", ["b", ["c"], ""], "d"]
    assert contentStringify(content) == ["a", "\tb", "\t\tc", "", "d"]


def test_globalize_only_touches_top_level_declarations():
    content = ["", "-- comment", "record go", ["x: number"], "end", "type a = number"]
    assert globalize(content) == [
        "",
        "-- comment",
        "global record go",
        ["x: number"],
        "end",
        "global type a = number",
    ]


def test_kind_order(config):
    group = ElementGroup(
        name="",
        elements=[
            makeFunction("b"),
            {"type": "BASIC_CLASS", "name": "a", "fields": {}},
            {"type": "VARIABLE", "name": "C", "description": ""},
            {"type": "BASIC_ALIAS", "name": "z", "alias": "number"},
        ],
    )

    content = TealGenerator(config).generateGroup(group, ["ns"])

    assert content == [
        "",
        "record a is userdata",
        [],
        [],
        "end",
        "type z = number",
        "C: any",
        "b: function()",
    ]


def test_header(config):
    lines = TealGenerator(config).renderApi([], "1.9.0")
    assert lines == [
        "--[[",
        "  Generated with github.com/astrochili/defold-annotations",
        "  Defold 1.9.0",
        "--]]",
        "",
    ]


def test_meta_classes_and_aliases(config):
    module = makeModule(
        "meta",
        [
            {"type": "BASIC_ALIAS", "name": "hash", "alias": "userdata"},
            {"type": "BASIC_ALIAS", "name": "bool", "alias": "boolean"},
            {"type": "BASIC_ALIAS", "name": "render_predicate_list", "alias": "vector3[]|string"},
            {
                "type": "BASIC_CLASS",
                "name": "vector3",
                "fields": {"y": "number", "x": "number The x component"},
                "operators": {
                    "unm": {"result": "vector3"},
                    "add": {"param": "vector3", "result": "vector3"},
                },
            },
        ],
    )

    lines = TealGenerator(config).renderApi([module], "1.9.0")

    assert lines[5:] == [
        "",
        "global record vector3 is userdata",
        "\t-- The x component",
        "\tx: number",
        "\ty: number",
        "\tmetamethod __add: function(vector3, vector3): vector3",
        "\tmetamethod __unm: function(vector3): vector3",
        "end",
        "global record hash is userdata end",
        "global type render_predicate_list = string|{vector3}",
    ]


def test_nested_records(config):
    module = makeModule(
        "meta",
        [
            {
                "type": "BASIC_CLASS",
                "name": "on_input.action",
                "fields": {"touch": "on_input.touch[] List of touch input"},
            },
        ],
    )

    lines = TealGenerator(config).renderApi([module], "1.9.0")

    assert lines[5:] == [
        "",
        "global record on_input",
        "",
        "\trecord action is userdata",
        "\t\t-- List of touch input",
        "\t\ttouch: {on_input.touch}",
        "\tend",
        "end",
    ]


def test_functions_in_records(config):
    allow(config, "vmath", "go")
    modules = [
        makeModule(
            "vmath",
            [
                makeFunction(
                    "vmath.length",
                    [makeParameter("v", ["vector3", "vector4"])],
                    [makeParameter("n", ["number"])],
                    "Calculates the length",
                ),
            ],
        ),
        makeModule(
            "go",
            [
                makeFunction(
                    "go.get_position",
                    [makeParameter("[id]", ["string", "hash", "url"])],
                    [makeParameter("position", ["vector3"])],
                ),
                makeFunction(
                    "go.animate",
                    [makeParameter("[complete_function]", ["function(self, url, property)"])],
                ),
                makeFunction(
                    "go.get_ids",
                    returnvalues=[makeParameter("ids", ["hash[]"]), makeParameter("count", ["number"])],
                ),
                {"type": "VARIABLE", "name": "go.PLAYBACK_NONE", "description": "no playback"},
                {"type": "PROPERTY", "name": "go.position", "description": "position"},
                {"type": "MESSAGE", "name": "go.enable", "description": "enable"},
            ],
        ),
    ]

    lines = TealGenerator(config).renderApi(modules, "1.9.0")

    assert lines[5:] == [
        "",
        "global record go",
        "\t-- no playback",
        "\tPLAYBACK_NONE: any",
        "\tanimate: function(complete_function?: function(self, url, hash))",
        "\tget_ids: function(): ({hash}, number)",
        "\tget_position: function(id?: any|string): vector3",
        "end",
        "",
        "global record vmath",
        "\t-- Calculates the length",
        "\tlength: function(v: any): number",
        "end",
    ]


def test_root_functions_are_global(config):
    allow(config, "builtins")
    module = makeModule(
        "builtins",
        [
            makeFunction("pprint", [makeParameter("v...", ["any"])]),
            {"type": "VARIABLE", "name": "VERSION", "description": ""},
        ],
    )

    lines = TealGenerator(config).renderApi([module], "1.9.0")

    assert lines[5:] == [
        "global VERSION: any",
        "global function pprint(...: any)",
    ]


def test_generic_function(config):
    allow(config, "vmath")
    module = makeModule(
        "vmath",
        [
            makeFunction(
                "vmath.lerp",
                [
                    makeParameter("t", ["number"]),
                    makeParameter("v1", ["vector3", "vector4"]),
                    makeParameter("v2", ["vector3", "vector4"]),
                ],
                [makeParameter("v", ["vector3", "vector4"])],
            ),
        ],
    )

    lines = TealGenerator(config).renderApi([module], "1.9.0")

    assert "\t-- T: any" in lines
    assert "\tlerp: function<T>(t: number, v1: T, v2: T): T" in lines


def test_ignored_functions(config):
    allow(config, "builtins")
    module = makeModule("builtins", [makeFunction("init"), makeFunction("hash")])
    lines = TealGenerator(config).renderApi([module], "1.9.0")
    assert lines[5:] == ["global function hash()"]


def test_default_patch(config):
    modules = [
        makeModule(
            "meta",
            [
                {"type": "BASIC_ALIAS", "name": "bool", "alias": "boolean"},
                {"type": "BASIC_ALIAS", "name": "editor.thing", "alias": "number"},
                {"type": "BASIC_CLASS", "name": "socket", "fields": {"is_global": True}},
                {"type": "BASIC_ALIAS", "name": "node", "alias": "userdata"},
            ],
        ),
        makeModule("go", [makeFunction("go.delete")]),
    ]

    lines = TealGenerator(config).renderApi(modules, "1.9.0")

    assert lines[5:] == ["global record node is userdata end"]


def test_class_without_fields_aborts(config):
    module = makeModule("meta", [{"type": "BASIC_CLASS", "name": "broken"}])
    with pytest.raises(AssertionError):
        TealGenerator(config).renderApi([module], "1.9.0")


def test_input_is_not_renamed(config):
    module = makeModule(
        "meta",
        [{"type": "BASIC_CLASS", "name": "on_input.touch", "fields": {"x": "number"}}],
    )
    TealGenerator(config).renderApi([module], "1.9.0")
    assert module["elements"][0]["name"] == "on_input.touch"


def test_generate_api_writes_single_file(config, capsys):
    module = makeModule("meta", [{"type": "BASIC_ALIAS", "name": "hash", "alias": "userdata"}])

    path = TealGenerator(config).generateApi([module], "1.9.0")

    assert os.listdir(config.apiFolder) == ["defold.d.tl"]
    with open(path, "r") as file:
        assert file.read().endswith("global record hash is userdata end\n")
    assert "-- Teal Annotations Generated Successfully!" in capsys.readouterr().out


def test_class_owns_its_namesake_record(config):
    module = makeModule(
        "meta",
        [
            {"type": "BASIC_CLASS", "name": "on_input", "fields": {"x": "number"}},
            {"type": "BASIC_CLASS", "name": "on_input.touch", "fields": {"id": "number"}},
        ],
    )

    lines = TealGenerator(config).renderApi([module], "1.9.0")

    assert lines[5:] == [
        "",
        "global record on_input is userdata",
        "\tx: number",
        "",
        "\trecord touch is userdata",
        "\t\tid: number",
        "\tend",
        "end",
    ]
    assert lines.count("global record on_input") == 0


def test_multiline_description(config):
    allow(config, "go")
    module = makeModule("go", [makeFunction("go.delete", description="a\nb")])

    lines = TealGenerator(config).renderApi([module], "1.9.0")

    assert lines[5:] == [
        "",
        "global record go",
        "\t-- a",
        "\t-- b",
        "\tdelete: function()",
        "end",
    ]


def test_optional_returns_are_bare_types(config):
    allow(config, "go")
    module = makeModule(
        "go",
        [makeFunction("go.find", returnvalues=[makeParameter("[r]", ["number"])])],
    )

    lines = TealGenerator(config).renderApi([module], "1.9.0")

    assert "\tfind: function(): number" in lines
