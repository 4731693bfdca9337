# Download the Defold version label and the API reference bundle
import io
import zipfile
from typing import List, Tuple

import requests

from .config import GeneratorConfig


def fetchVersion(config: GeneratorConfig) -> str:
    response = requests.get(config.versionUrl)
    response.raise_for_status()
    return response.json()["version"]


def fetchDocs(config: GeneratorConfig, defoldVersion: str) -> List[Tuple[str, str]]:
    """Return (file name, json text) pairs of the ref-doc.zip of the version, sorted by name"""
    url = config.docsUrl.format(version=defoldVersion)
    print(f"-- Fetching {url}")

    response = requests.get(url)
    response.raise_for_status()

    with zipfile.ZipFile(io.BytesIO(response.content)) as archive:
        names = sorted(name for name in archive.namelist() if name.endswith(".json"))
        return [(name, archive.read(name).decode("utf-8")) for name in names]
