
import os, yaml
from .config import GuardConfig
from .sanitize import load_sanitizer_rules, rules_from_mapping

def _read_yaml(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}

def _merge(base: dict, over: dict) -> dict:
    # nested mappings merge key by key; anything else in `over` replaces
    out = dict(base)
    for k, v in over.items():
        out[k] = _merge(out[k], v) if isinstance(v, dict) and isinstance(out.get(k), dict) else v
    return out

def load_settings(default_path: str = "config/settings.yaml") -> dict:
    """settings.yaml, then settings.local.yaml next to it, then OPENAI_API_KEY."""
    if not os.path.exists(default_path):
        raise RuntimeError(f"Settings file not found: {default_path}")
    settings = _read_yaml(default_path)
    local_path = os.path.join(os.path.dirname(default_path), "settings.local.yaml")
    if os.path.exists(local_path):
        settings = _merge(settings, _read_yaml(local_path))
    api_key = os.environ.get("OPENAI_API_KEY")
    if api_key:
        settings = _merge(settings, {"llm": {"openai": {"api_key": api_key}}})
    return settings

def get_provider_config(settings: dict, provider: str = None) -> dict:
    prov = (provider or settings.get("provider") or "openai").lower()
    return (settings.get("llm") or {}).get(prov, {})

def _str_list(value, key):
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"settings '{key}' must be a list of strings.")
    return list(value)

def build_guard_config(settings: dict, base_dir: str = None) -> GuardConfig:
    """
    GuardConfig from the 'guard' and 'sanitizer' sections; absent keys keep the defaults.
    'sanitizer.path' names a standalone rules yaml (relative to base_dir) and
    takes precedence over an inline 'sanitizer.replace'.
    """
    cfg = GuardConfig()
    guard = settings.get("guard") or {}
    if "labels" in guard:
        cfg.labels = _str_list(guard["labels"], "guard.labels")
    if guard.get("token_format"):
        if "{n}" not in guard["token_format"]:
            raise ValueError("settings 'guard.token_format' must contain '{n}'.")
        cfg.token_format = str(guard["token_format"])
    if "leak_patterns" in guard:
        cfg.leak_patterns = _str_list(guard["leak_patterns"], "guard.leak_patterns")
    if "label_prefixes" in guard:
        cfg.label_prefixes = _str_list(guard["label_prefixes"], "guard.label_prefixes")
    if "label_suffixes" in guard:
        cfg.label_suffixes = _str_list(guard["label_suffixes"], "guard.label_suffixes")
    sanitizer = settings.get("sanitizer") or {}
    if sanitizer.get("path"):
        path = sanitizer["path"]
        if base_dir and not os.path.isabs(path):
            path = os.path.join(base_dir, path)
        cfg.sanitizer_rules = load_sanitizer_rules(path)
    elif sanitizer:
        cfg.sanitizer_rules = rules_from_mapping(sanitizer)
    return cfg
