import html
import re
from typing import List, Optional

TAG_PATTERN = re.compile(r"<[^<>]*>")


def decodeText(text: Optional[str]) -> str:
    """Get rid of html tags and entities"""
    if not text:
        return ""
    return html.unescape(TAG_PATTERN.sub("", text))


def getLines(text: str) -> List[str]:
    return text.split("\n")


def makeComment(text: Optional[str], tab: str = "---") -> str:
    decoded = decodeText(text)
    return "\n".join(tab + line for line in getLines(decoded))


def makeParamDescription(description: Optional[str], tab: str = "---") -> str:
    # The first line follows the tag, the rest are comment lines of their own
    return decodeText(description).replace("\n", "\n" + tab)


def splitTypeComment(text: str):
    index = text.find(" ")
    if index == -1:
        return text, ""
    return text[:index], text[index + 1 :].strip()
