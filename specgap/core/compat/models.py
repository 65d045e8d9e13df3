from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


class SupportStatement(BaseModel):
    # version_added: "79", "≤18", "preview", True, False or None
    version_added: Union[str, bool, None] = None
    version_removed: Union[str, bool, None] = None
    partial_implementation: bool = False
    flags: List[Dict[str, Any]] = Field(default_factory=list)
    prefix: Optional[str] = None
    alternative_name: Optional[str] = None
    notes: Union[str, List[str], None] = None

    @property
    def is_gated(self) -> bool:
        return bool(self.partial_implementation or self.flags)


class CompatRecord(BaseModel):
    support: Dict[str, Union[SupportStatement, List[SupportStatement]]] = Field(default_factory=dict)
    spec_url: Union[str, List[str], None] = None
    mdn_url: Optional[str] = None
    description: Optional[str] = None

    def spec_urls(self) -> List[str]:
        if self.spec_url is None:
            return []
        if isinstance(self.spec_url, str):
            return [self.spec_url]
        return list(self.spec_url)

    def current_support(self, browser: str) -> Optional[SupportStatement]:
        """First statement is the current one when BCD lists several."""
        entry = self.support.get(browser)
        if isinstance(entry, list):
            return entry[0] if entry else None
        return entry


@dataclass
class CompatNode:
    name: str
    compat: Optional[CompatRecord] = None
    children: Dict[str, "CompatNode"] = field(default_factory=dict)

    @property
    def is_leaf_feature(self) -> bool:
        return self.compat is not None

    @classmethod
    def from_dict(cls, name: str, raw: Dict[str, Any]) -> "CompatNode":
        compat = raw.get("__compat")
        node = cls(
            name=name,
            compat=CompatRecord.model_validate(compat) if isinstance(compat, dict) else None,
        )
        for key, value in raw.items():
            # "__compat", "__meta" and friends are metadata, not children
            if key.startswith("__") or not isinstance(value, dict):
                continue
            node.children[key] = cls.from_dict(key, value)
        return node


CompatTree = Dict[str, CompatNode]


def build_compat_tree(raw: Dict[str, Any]) -> CompatTree:
    return {
        name: CompatNode.from_dict(name, value)
        for name, value in raw.items()
        if not name.startswith("__") and isinstance(value, dict)
    }
