
import re
from typing import List, Optional

DEFAULT_PREFIXES = [r"\*\*", r"###[ \t]+"]
DEFAULT_SUFFIXES = [r"\*\*"]

def _decoration(fragments: List[str]) -> str:
    if not fragments:
        return ""
    return "(?:" + "|".join(fragments) + ")?"

def normalize_labels(content: str, labels: List[str],
                     prefixes: Optional[List[str]] = None,
                     suffixes: Optional[List[str]] = None) -> str:
    """Collapse decorated label lines (bold, heading) back to the canonical label."""
    if not content:
        return content
    pre = _decoration(DEFAULT_PREFIXES if prefixes is None else prefixes)
    suf = _decoration(DEFAULT_SUFFIXES if suffixes is None else suffixes)
    out = content
    for label in labels or []:
        text = label.strip()
        core = text.strip("*")
        if not core:
            continue
        rx = re.compile(rf"^([ \t]*){pre}{re.escape(core)}{suf}[ \t]*(?=\r?$)", re.MULTILINE | re.IGNORECASE)
        out = rx.sub(lambda m, t=text: m.group(1) + t, out)
    return out
