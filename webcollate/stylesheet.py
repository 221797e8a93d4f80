"""Stylesheet loading and rule lookup."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import tinycss2

from .config import DEFAULT_STYLESHEET, TEMPLATES_DIR
from .errors import ResourceError


def resolve_resource(path: Optional[str], default: str) -> Path:
    """Find a template or stylesheet in the working directory, then in the package."""
    candidate = Path(path or default).expanduser()
    if candidate.is_absolute() or candidate.exists():
        return candidate
    return TEMPLATES_DIR / candidate


def read_resource(path: Optional[str], default: str) -> str:
    source = resolve_resource(path, default)
    try:
        return source.read_text(encoding="utf-8")
    except OSError as exc:
        raise ResourceError(f"Cannot read {source}: {exc}") from exc


def _selectors(rule: tinycss2.ast.QualifiedRule) -> List[str]:
    prelude = tinycss2.serialize(rule.prelude)
    return [" ".join(part.split()) for part in prelude.split(",")]


@dataclass
class Stylesheet:
    """Raw CSS text together with its parsed rule list."""

    text: str
    rules: list = field(default_factory=list)

    @classmethod
    def parse(cls, text: str) -> "Stylesheet":
        rules = tinycss2.parse_stylesheet(text, skip_comments=True, skip_whitespace=True)
        return cls(text=text, rules=rules)

    @classmethod
    def load(
        cls, path: Optional[str], extra_css: str = "", default: str = DEFAULT_STYLESHEET
    ) -> "Stylesheet":
        return cls.parse(read_resource(path, default) + (extra_css or ""))

    def declarations_for(self, selector: str) -> str:
        """Return the declarations of every rule naming ``selector`` as a style attribute value.

        Declarations are written ``property: value`` and joined with ``;``,
        in source order across all matching rules. Empty when no rule matches.
        """
        blocks: List[str] = []
        for rule in self.rules:
            if rule.type != "qualified-rule" or selector not in _selectors(rule):
                continue
            parts = []
            for declaration in tinycss2.parse_declaration_list(
                rule.content, skip_comments=True, skip_whitespace=True
            ):
                if declaration.type != "declaration":
                    continue
                value = tinycss2.serialize(declaration.value).strip()
                if declaration.important:
                    value += " !important"
                parts.append(f"{declaration.name}: {value}")
            blocks.append(";".join(parts))
        return ";".join(blocks)
