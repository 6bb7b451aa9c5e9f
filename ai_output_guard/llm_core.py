
from dataclasses import dataclass
from typing import Dict, List, Optional
from openai import OpenAI
from .settings import get_provider_config

DEFAULT_REWRITE_SYSTEM = """You are a technical editor for tool reference documentation.
Improve clarity and grammar of the markdown you are given without changing its meaning.

Core rules (MUST):
- Output ONLY the rewritten markdown (no preamble, no notes, no code fences around it).
- Keep every line of the form <<<TPL_LABEL_N>>> EXACTLY as it is, on its own line. Never translate, bold or remove it.
- Keep headings, lists, links, HTML comments and parameter names unchanged.
"""

DEFAULT_PROMPTS_SYSTEM = """You write example natural-language prompts for a command-line tool.
Return a single JSON object whose only key is the tool name and whose value is an array of prompt strings, e.g.
{"storage account list": ["List all storage accounts in my subscription"]}
Put the JSON in a ```json fenced block. Use straight quotes.
"""

@dataclass
class ChatReply:
    text: str
    truncated: bool = False
    finish_reason: Optional[str] = None

class LLMClient:
    """
    One chat completion per call. Retries, rate limits and scheduling belong to the caller.
    """
    def __init__(self, provider: str = None, model: str = None, temperature: float = 0.2,
                 max_tokens: Optional[int] = None, settings: dict = None, client=None):
        self.settings = settings or {}
        self.provider = (provider or self.settings.get("provider") or "openai")
        prov_cfg = get_provider_config(self.settings, self.provider)
        self.model = model or prov_cfg.get("model")
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = client

    @property
    def client(self):
        if self._client is None:
            prov_cfg = get_provider_config(self.settings, self.provider)
            api_key = prov_cfg.get("api_key")
            base_url = prov_cfg.get("base_url") or None
            organization = prov_cfg.get("organization") or None
            extra_headers = prov_cfg.get("extra_headers") or None
            if not api_key:
                raise RuntimeError(f"API key missing for provider={self.provider}. Fill config/settings.yaml or settings.local.yaml.")
            self._client = OpenAI(api_key=api_key, base_url=base_url, organization=organization, default_headers=extra_headers)
        return self._client

    def complete(self, messages: List[Dict[str, str]]) -> ChatReply:
        if not self.model:
            raise RuntimeError(f"Model missing for provider={self.provider}.")
        kwargs = {"model": self.model, "temperature": self.temperature, "messages": messages}
        if self.max_tokens:
            kwargs["max_tokens"] = self.max_tokens
        rsp = self.client.chat.completions.create(**kwargs)
        choice = rsp.choices[0]
        text = (choice.message.content or "").strip()
        # "length" means the provider cut the answer at the token limit
        return ChatReply(text=text, truncated=(choice.finish_reason == "length"), finish_reason=choice.finish_reason)

    def chat(self, system_prompt: str, user_prompt: str) -> ChatReply:
        return self.complete([{"role": "system", "content": system_prompt}, {"role": "user", "content": user_prompt}])
