from __future__ import annotations

import logging
import os
import random as _random
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

PASSAGES_DIR_ENV = "TYPELENS_PASSAGES_DIR"
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class Passage:
    key: str
    title: str
    text: str
    source: str = "library"

    @classmethod
    def from_text(cls, text: str, title: str = "Untitled") -> "Passage":
        """Wrap text pasted by the user."""
        if not text or not text.strip():
            raise ValueError("Passage text is empty")
        return cls(key="pasted", title=title.strip() or "Untitled", text=text.strip(), source="pasted")

    @property
    def word_count(self) -> int:
        return len(self.text.split(" "))


def default_passages_dir() -> Path:
    override = os.environ.get(PASSAGES_DIR_ENV)
    if override:
        return Path(override)
    return Path(__file__).resolve().parent.parent / "data" / "passages"


class PassageRepository:
    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = Path(base_dir) if base_dir is not None else default_passages_dir()
        self._passages = self._load_passages()

    def all(self) -> List[Passage]:
        return list(self._passages.values())

    def get(self, key: str) -> Passage:
        return self._passages[key]

    def random(self, rng: Optional[_random.Random] = None) -> Passage:
        return (rng or _random).choice(self.all())

    def _load_passages(self) -> Dict[str, Passage]:
        base_dir = self._base_dir
        if not base_dir.exists():
            raise FileNotFoundError(f"Passages directory not found: {base_dir}")

        passages: Dict[str, Passage] = {}

        def _sort_key(p: Path) -> tuple[int, str]:
            m = re.match(r"^passage(\d+)$", p.stem)
            if m:
                return (int(m.group(1)), p.stem)
            return (10**9, p.stem)

        for path in sorted(base_dir.glob("passage*.yaml"), key=_sort_key):
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
            if not raw or not isinstance(raw, dict):
                raise ValueError(f"{path.name}: expected YAML with 'title' and 'content'")
            title = raw.get("title")
            content = raw.get("content")
            if not title or not isinstance(title, str):
                raise ValueError(f"{path.name}: missing or invalid 'title'")
            if content is None:
                raise ValueError(f"{path.name}: missing 'content'")
            if isinstance(content, list):
                content = " ".join(str(item) for item in content)
            # typed text is compared on single spaces, so fold line breaks
            text = _WHITESPACE.sub(" ", str(content)).strip()
            if not text:
                raise ValueError(f"{path.name}: 'content' is empty")
            source = raw.get("source") or "library"
            passages[path.stem] = Passage(key=path.stem, title=title.strip(), text=text, source=str(source))

        if not passages:
            raise ValueError(f"No passage files (passage*.yaml) found in {base_dir}")
        logger.info("Loaded %d passages from %s", len(passages), base_dir)
        return passages
