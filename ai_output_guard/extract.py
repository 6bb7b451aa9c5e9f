
import re
from typing import Optional

FENCE = "```"
JSON_FENCE = "```json"
FENCED_BLOCK_RE = re.compile(r"```(.*?)```", re.DOTALL)

def _from_json_fence(text: str) -> Optional[str]:
    start = text.find(JSON_FENCE)
    if start < 0:
        return None
    start += len(JSON_FENCE)
    end = text.find(FENCE, start)
    if end < 0:
        return None
    return text[start:end].strip()

def _from_last_fence(text: str) -> Optional[str]:
    blocks = FENCED_BLOCK_RE.findall(text)
    if not blocks:
        return None
    last = blocks[-1].strip()
    # a tagged or example-format block is not the answer; let the brace scan look
    return last if last.startswith("{") else None

def _from_braces(text: str) -> str:
    # brace depth only; braces inside string literals are not special-cased
    start = text.find("{")
    if start < 0:
        return ""
    depth = 0
    for i in range(start, len(text)):
        ch = text[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return ""

def extract_json(response: Optional[str]) -> str:
    """
    Pull the JSON object out of a model reply that may carry reasoning,
    checklists or code fences around it.
      1) a ```json fenced block
      2) the LAST ``` fenced block, when it starts with "{" (the final
         answer follows the commentary)
      3) the first balanced {...} region
    Returns "" when nothing JSON-looking is found.
    """
    if not response:
        return ""
    for strategy in (_from_json_fence, _from_last_fence):
        out = strategy(response)
        if out is not None:
            return out
    return _from_braces(response)
