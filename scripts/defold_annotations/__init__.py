from .config import GeneratorConfig, defaultConfig, loadConfig
from .lua import LuaGenerator
from .teal import TealGenerator

__all__ = ["GeneratorConfig", "defaultConfig", "loadConfig", "LuaGenerator", "TealGenerator"]
