# Run from the folder where the api folder should be created
# python -m defold_annotations [defold version] [corrections.json]
import sys

from .config import loadConfig
from .fetcher import fetchDocs, fetchVersion
from .lua import LuaGenerator
from .meta import makeModule
from .output import createFolder, deleteFolder
from .parser import parseJson
from .teal import TealGenerator


def main():
    assert len(sys.argv) <= 3, "Usage: python -m defold_annotations [defold version] [corrections.json]"

    config = loadConfig(sys.argv[2] if len(sys.argv) > 2 else None)

    # Fetch the Defold version if it isn't given
    defoldVersion = sys.argv[1] if len(sys.argv) > 1 else fetchVersion(config)
    documents = fetchDocs(config, defoldVersion)

    # Known types and aliases go first
    modules = [makeModule(config)]
    parseJson(documents, modules)

    deleteFolder(config.apiFolder)
    createFolder(config.apiFolder)

    LuaGenerator(config).generateApi(modules, defoldVersion)
    TealGenerator(config).generateApi(modules, defoldVersion)


if __name__ == "__main__":
    main()
