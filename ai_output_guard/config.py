
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

@dataclass
class GuardConfig:
    # Label lines the docs templates emit; the model must not reword them
    labels: List[str] = field(default_factory=lambda: [
        "Example prompts include:",
        "Example prompts:",
        "Required options:",
        "Optional options:",
        "Required parameters:",
        "Optional parameters:",
        "**Prerequisites**:",
        "**Success verification**:",
        "[Tool annotation hints](index.md#tool-annotations-for-azure-mcp-server):",
        "[Tool annotation hints](../index.md#tool-annotations-for-azure-mcp-server):",
        "[Tool annotation hints](../../index.md#tool-annotations-for-azure-mcp-server):",
    ])

    # Active token format ({n} = position of the label in the document)
    token_format: str = "<<<TPL_LABEL_{n}>>>"

    # Current format first, then formats used by earlier releases
    leak_patterns: List[str] = field(default_factory=lambda: [
        r"<<<TPL_LABEL_\d+>>>",
        r"__TPL_LABEL_\d+__",
        r"\*\*TPL_LABEL_\d+\*\*",
    ])

    # Decorations the normalizer strips from a label (regex fragments)
    label_prefixes: List[str] = field(default_factory=lambda: [r"\*\*", r"###[ \t]+"])
    label_suffixes: List[str] = field(default_factory=lambda: [r"\*\*"])

    # Literal (pattern, replacement) pairs; None keeps the built-in table
    sanitizer_rules: Optional[List[Tuple[str, str]]] = None
