from __future__ import annotations

from typing import Dict, Iterable

# Browsers that ship another browser's engine
CODEBASE_ALIASES: Dict[str, str] = {
    "edge": "chrome",
}


def codebase_of(browser: str) -> str:
    if browser in CODEBASE_ALIASES:
        return CODEBASE_ALIASES[browser]
    return browser.split("_", 1)[0]


def count_codebases(browsers: Iterable[str]) -> int:
    return len({codebase_of(b) for b in browsers})
