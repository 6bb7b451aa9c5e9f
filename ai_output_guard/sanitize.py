
import os, re
from typing import Dict, List, Optional, Tuple
import yaml

DEFAULT_RULES: List[Tuple[str, str]] = [
    ("\u2018", "'"),
    ("\u2019", "'"),
    ("\u201c", '"'),
    ("\u201d", '"'),
    ("&quot;", '"'),
    ("&#34;", '"'),
    ("&apos;", "'"),
    ("&#39;", "'"),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
]

class SanitizationRuleSet:
    """
    Ordered literal (pattern, replacement) pairs applied in ONE pass.
    Text produced by a replacement is never scanned again, so "&amp;lt;"
    comes out as "&lt;" rather than "<".
    """
    def __init__(self, rules: Optional[List[Tuple[str, str]]] = None):
        self.rules = [(str(p), str(r)) for p, r in (DEFAULT_RULES if rules is None else rules) if p]
        self._table: Dict[str, str] = {}
        for p, r in self.rules:
            self._table.setdefault(p, r)
        self._rx = re.compile("|".join(re.escape(p) for p, _ in self.rules)) if self.rules else None

    def apply(self, text: Optional[str]) -> Optional[str]:
        if not text or self._rx is None:
            return text
        return self._rx.sub(lambda m: self._table[m.group(0)], text)

def sanitize_text(text: Optional[str], rules: Optional[SanitizationRuleSet] = None) -> Optional[str]:
    return (rules or SanitizationRuleSet()).apply(text)

def load_sanitizer_rules(path: str) -> List[Tuple[str, str]]:
    """Read a {"replace": {pattern: replacement}} yaml file; missing file -> built-in rules."""
    if os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            mapping = yaml.safe_load(f) or {}
        return rules_from_mapping(mapping)
    return list(DEFAULT_RULES)

def rules_from_mapping(mapping: dict) -> List[Tuple[str, str]]:
    rep = mapping.get("replace")
    if rep is None:
        return list(DEFAULT_RULES)
    if not isinstance(rep, dict):
        raise ValueError("sanitizer 'replace' must be a mapping of pattern -> replacement.")
    return [(str(k), "" if v is None else str(v)) for k, v in rep.items()]
