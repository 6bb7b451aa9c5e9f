
import json, re
from dataclasses import dataclass, field
from typing import List, Optional
from .extract import extract_json
from .sanitize import SanitizationRuleSet

TRAILING_COMMA_RE = re.compile(r",\s*([\]}])")

@dataclass
class PromptsResponse:
    tool_name: str
    prompts: List[str] = field(default_factory=list)

def strip_trailing_commas(text: str) -> str:
    return TRAILING_COMMA_RE.sub(r"\1", text)

def parse_prompts_response(json_text: Optional[str], sanitizer: Optional[SanitizationRuleSet] = None) -> Optional[PromptsResponse]:
    """
    Parse {"<tool>": ["prompt", ...]} into a PromptsResponse.

    Only the first key (document order) is kept; the model is asked about one
    tool, so further keys are answers nobody asked for. Returns None for
    empty, unparseable or key-less input, or when the first value is not a
    list of strings.
    """
    if not json_text or not json_text.strip():
        return None
    try:
        data = json.loads(strip_trailing_commas(json_text))
    except ValueError:
        return None
    if not isinstance(data, dict) or not data:
        return None
    tool_name, prompts = next(iter(data.items()))
    if not isinstance(prompts, list) or not all(isinstance(p, str) for p in prompts):
        return None
    sanitizer = sanitizer or SanitizationRuleSet()
    return PromptsResponse(tool_name=tool_name, prompts=[sanitizer.apply(p) for p in prompts])

def parse_llm_prompts(response: Optional[str], sanitizer: Optional[SanitizationRuleSet] = None) -> Optional[PromptsResponse]:
    """Extract the JSON object from a raw reply and parse it."""
    return parse_prompts_response(extract_json(response), sanitizer)
