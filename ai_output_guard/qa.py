
import re
from typing import Iterable, List, Optional
import pandas as pd

LEAKED_TOKEN_PATTERNS = [r"<<<TPL_LABEL_\d+>>>", r"__TPL_LABEL_\d+__", r"\*\*TPL_LABEL_\d+\*\*"]

def _compile(patterns):
    return re.compile("|".join(f"(?:{p})" for p in patterns))

def find_leaked_tokens(content: str, patterns: Optional[List[str]] = None) -> List[str]:
    """Every label token (current or historical format) still present, in document order."""
    patterns = LEAKED_TOKEN_PATTERNS if patterns is None else patterns
    if not content or not patterns:
        return []
    return [m.group(0) for m in _compile(patterns).finditer(content)]

def has_leaks(content: str, patterns: Optional[List[str]] = None) -> bool:
    return bool(find_leaked_tokens(content, patterns))

def leak_report(outcomes: Iterable) -> pd.DataFrame:
    """
    Tabulate (document name, RewriteOutcome) pairs: one row per document with
    its fallback flag, the reason and any leaked tokens.
    """
    rows = []
    for name, oc in outcomes:
        issues = []
        if oc.leaked_tokens:
            issues.append(f"leaked tokens: {', '.join(oc.leaked_tokens)}")
        if oc.truncated:
            issues.append("truncated response")
        rows.append({
            "document": name,
            "fallback": bool(oc.fallback),
            "reason": oc.reason or "",
            "issues": " | ".join(issues),
            "has_issue": bool(issues),
        })
    return pd.DataFrame(rows, columns=["document", "fallback", "reason", "issues", "has_issue"])
