
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union
from tqdm import tqdm
from .config import GuardConfig
from .protect import ProtectedContent, protect_labels, restore_labels
from .normalize import normalize_labels
from .qa import find_leaked_tokens
from .extract import extract_json
from .prompts import PromptsResponse, parse_prompts_response
from .sanitize import SanitizationRuleSet
from .llm_core import ChatReply, DEFAULT_REWRITE_SYSTEM, DEFAULT_PROMPTS_SYSTEM

# chat(system_prompt, user_prompt) -> ChatReply, or plain text when the host has no truncation signal
ChatFn = Callable[[str, str], Union[ChatReply, str]]

@dataclass
class RewriteOutcome:
    content: str
    fallback: bool = False
    leaked_tokens: List[str] = field(default_factory=list)
    truncated: bool = False
    reason: str = ""

def _say(msg: str, quiet: bool):
    if not quiet:
        tqdm.write(msg)

def _as_reply(out) -> ChatReply:
    if isinstance(out, ChatReply):
        return out
    return ChatReply(text=out or "")

# ------------------ Pipeline A: content rewrite ------------------
def protect_for_rewrite(content: str, cfg: GuardConfig) -> ProtectedContent:
    return protect_labels(content, cfg.labels, cfg.token_format)

def finish_rewrite(original: str, ai_text: str, protected: ProtectedContent, cfg: GuardConfig,
                   truncated: bool = False) -> RewriteOutcome:
    """
    Restore -> normalize -> leak check on the model's answer.
    A truncated answer or any leftover token means the original content is
    published instead of the rewrite.
    """
    if truncated:
        return RewriteOutcome(content=original, fallback=True, truncated=True, reason="truncated")
    restored = restore_labels(ai_text, protected.token_map)
    restored = normalize_labels(restored, cfg.labels, cfg.label_prefixes, cfg.label_suffixes)
    leaked = find_leaked_tokens(restored, cfg.leak_patterns)
    if leaked:
        return RewriteOutcome(content=original, fallback=True, leaked_tokens=leaked, reason="leaked tokens")
    # chat replies come back stripped; keep the document's final newline
    if original and original.endswith("\n") and restored and not restored.endswith("\n"):
        restored += "\r\n" if original.endswith("\r\n") else "\n"
    return RewriteOutcome(content=restored)

def rewrite_with_model(original: str, chat: ChatFn, cfg: GuardConfig,
                       system_prompt: str = DEFAULT_REWRITE_SYSTEM,
                       user_template: str = "{content}") -> RewriteOutcome:
    protected = protect_for_rewrite(original, cfg)
    reply = _as_reply(chat(system_prompt, user_template.replace("{content}", protected.content)))
    return finish_rewrite(original, reply.text, protected, cfg, truncated=reply.truncated)

def rewrite_documents(docs: Union[Dict[str, str], Iterable[Tuple[str, str]]], chat: ChatFn,
                      cfg: Optional[GuardConfig] = None, *, system_prompt: str = DEFAULT_REWRITE_SYSTEM,
                      user_template: str = "{content}", quiet: bool = False) -> List[Tuple[str, RewriteOutcome]]:
    """
    Rewrite independent documents one by one (tqdm progress). Fallbacks are
    reported as warnings and never stop the run.
    """
    cfg = cfg or GuardConfig()
    items = list(docs.items()) if isinstance(docs, dict) else list(docs)
    results: List[Tuple[str, RewriteOutcome]] = []
    bar = tqdm(total=len(items), desc="Rewriting documents", disable=quiet)
    for name, content in items:
        oc = rewrite_with_model(content, chat, cfg, system_prompt=system_prompt, user_template=user_template)
        if oc.truncated:
            _say(f"[warn] {name}: truncated response, keeping original content", quiet)
        elif oc.leaked_tokens:
            _say(f"[warn] {name}: leaked tokens {', '.join(oc.leaked_tokens)}, keeping original content", quiet)
        results.append((name, oc))
        bar.update(1)
    bar.close()
    n_fb = sum(1 for _, oc in results if oc.fallback)
    _say(f"[OK] rewritten={len(results) - n_fb} fallback={n_fb}", quiet)
    return results

# ------------------ Pipeline B: example prompts ------------------
def prompts_from_response(raw: str, cfg: Optional[GuardConfig] = None, *, quiet: bool = True) -> Optional[PromptsResponse]:
    cfg = cfg or GuardConfig()
    json_text = extract_json(raw)
    if not json_text:
        _say("[warn] no JSON found in model response", quiet)
        return None
    parsed = parse_prompts_response(json_text, SanitizationRuleSet(cfg.sanitizer_rules))
    if parsed is None:
        _say("[warn] JSON parse failed for model response", quiet)
    return parsed

def generate_prompts_with_model(user_prompt: str, chat: ChatFn, cfg: Optional[GuardConfig] = None, *,
                                system_prompt: str = DEFAULT_PROMPTS_SYSTEM,
                                quiet: bool = True) -> Tuple[Optional[PromptsResponse], str]:
    """Returns (parsed prompts or None, raw model text)."""
    reply = _as_reply(chat(system_prompt, user_prompt))
    if reply.truncated:
        _say("[warn] model response was truncated; JSON may be incomplete", quiet)
    return prompts_from_response(reply.text, cfg, quiet=quiet), reply.text

def generate_prompts_batch(requests: Union[Dict[str, str], Iterable[Tuple[str, str]]], chat: ChatFn,
                           cfg: Optional[GuardConfig] = None, *, system_prompt: str = DEFAULT_PROMPTS_SYSTEM,
                           quiet: bool = False) -> Dict[str, Optional[PromptsResponse]]:
    """requests: tool command -> user prompt. Tools without a usable answer map to None."""
    cfg = cfg or GuardConfig()
    items = list(requests.items()) if isinstance(requests, dict) else list(requests)
    out: Dict[str, Optional[PromptsResponse]] = {}
    bar = tqdm(total=len(items), desc="Generating example prompts", disable=quiet)
    for tool, user_prompt in items:
        parsed, _raw = generate_prompts_with_model(user_prompt, chat, cfg, system_prompt=system_prompt, quiet=True)
        if parsed is None:
            _say(f"[warn] {tool}: no usable prompts in model response", quiet)
        out[tool] = parsed
        bar.update(1)
    bar.close()
    ok = sum(1 for v in out.values() if v is not None)
    _say(f"[OK] prompts={ok} failed={len(out) - ok}", quiet)
    return out
