import shutil
from pathlib import Path
from typing import List


def deleteFolder(path: str):
    folder = Path(path)
    if folder.exists():
        shutil.rmtree(folder)


def createFolder(path: str):
    Path(path).mkdir(parents=True, exist_ok=True)


def saveFile(content: str, path: str):
    with open(path, "w", encoding="utf-8") as file:
        file.write(content)


def saveFileLines(lines: List[str], path: str):
    saveFile("\n".join(lines) + "\n", path)
