
import re
from typing import Dict, List, NamedTuple

DEFAULT_TOKEN_FORMAT = "<<<TPL_LABEL_{n}>>>"

class ProtectedContent(NamedTuple):
    content: str
    token_map: Dict[str, str]

def _compile_label_regex(labels: List[str]):
    # whole line: indent, label, trailing blanks; a CR before the newline stays outside
    alt = "|".join(re.escape(lb) for lb in labels)
    return re.compile(rf"^([ \t]*)((?:{alt})[ \t]*)(?=\r?$)", re.MULTILINE)

def protect_labels(content: str, labels: List[str], token_format: str = DEFAULT_TOKEN_FORMAT) -> ProtectedContent:
    """Swap known template label lines for positional tokens before an AI rewrite.

    Tokens are numbered from 0 in order of appearance. The indentation of a
    label line stays in place; the map records the text the token stands for.
    """
    token_map: Dict[str, str] = {}
    labels = [lb for lb in (labels or []) if lb]
    if not content or not labels:
        return ProtectedContent(content, token_map)

    def sub(m):
        token = token_format.format(n=len(token_map))
        token_map[token] = m.group(2)
        return m.group(1) + token

    out = _compile_label_regex(labels).sub(sub, content)
    return ProtectedContent(out, token_map)

def restore_labels(text: str, token_map: Dict[str, str]) -> str:
    """Put the original label text back in place of every token."""
    if not text or not token_map:
        return text
    out = text
    for token, original in token_map.items():
        out = out.replace(token, original)
    return out
