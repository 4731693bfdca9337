import pytest

from defold_annotations.config import defaultConfig


@pytest.fixture
def config(tmp_path):
    config = defaultConfig()
    config.apiFolder = str(tmp_path)
    return config


def makeFunction(name, parameters=(), returnvalues=(), description=""):
    return {
        "type": "FUNCTION",
        "name": name,
        "description": description,
        "parameters": list(parameters),
        "returnvalues": list(returnvalues),
    }


def makeParameter(name, types, doc=""):
    return {"name": name, "doc": doc, "types": list(types)}


def makeModule(namespace, elements, brief="", description=None):
    return {
        "namespace": namespace,
        "brief": brief or namespace,
        "description": description,
        "elements": list(elements),
    }
