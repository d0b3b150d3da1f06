"""Shared test helpers."""

from dataclasses import dataclass, field
from typing import List


@dataclass
class Template:
    """Minimal template shape accepted by the matcher."""

    title: str
    content: str
    keywords: List[str] = field(default_factory=list)
    is_active: bool = True
    id: str = ""


@dataclass
class NamedCategory:
    id: str
    name: str


PORTAL_QUESTION = "How do I access the assignment portal?"
