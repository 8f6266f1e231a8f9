from __future__ import annotations
import re
from bs4 import BeautifulSoup

# [19/10/2026 08:15] Nome: ...   |   19/10/2026 08:15 - Nome: ...
WHATSAPP_PREFIX = re.compile(
    r"^\s*(?:\[\d{1,2}/\d{1,2}/\d{2,4},?\s+\d{1,2}:\d{2}(?::\d{2})?\]|\d{1,2}/\d{1,2}/\d{2,4},?\s+\d{1,2}:\d{2}\s+-)\s*[^:\n]{1,60}:\s*",
    re.M,
)
HTML_HINT = re.compile(r"<(?:html|body|p|li|br|div|ul|ol|table|tr)\b", re.I)
BLOCK_TAGS = ["p", "li", "div", "tr", "h1", "h2", "h3", "h4", "h5", "h6"]

def _html_to_text(content: str) -> str:
    soup = BeautifulSoup(content, "lxml")
    for br in soup.find_all("br"):
        br.replace_with("\n")
    for block in soup.find_all(BLOCK_TAGS):
        block.append("\n")
    return soup.get_text()

def clean_pasted_text(text: str) -> str:
    text = text.replace("\r\n", "\n").replace("\r", "\n").replace("\u00a0", " ").replace("\t", " ")
    text = WHATSAPP_PREFIX.sub("", text)
    return "\n".join(ln.strip() for ln in text.split("\n"))

def to_plain_text(input_type: str, content: str) -> str:
    t = (input_type or "auto").lower()
    content = content or ""
    if t == "html" or (t == "auto" and HTML_HINT.search(content)):
        content = _html_to_text(content)
    return clean_pasted_text(content)
