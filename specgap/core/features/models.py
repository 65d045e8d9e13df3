from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from specgap.core.specs.models import SpecRecord


Baseline = Literal[False, "low", "high"]


class FeatureStatus(BaseModel):
    baseline: Optional[Baseline] = None
    support: Dict[str, str] = Field(default_factory=dict)


class FeatureDescriptor(BaseModel):
    id: str
    name: Optional[str] = None
    status: Optional[FeatureStatus] = None
    spec: Union[str, List[str], None] = None
    compat_features: Optional[List[str]] = None

    def spec_urls(self) -> List[str]:
        if self.spec is None:
            return []
        if isinstance(self.spec, str):
            return [self.spec]
        return list(self.spec)

    @property
    def baseline(self) -> Optional[Baseline]:
        return self.status.baseline if self.status is not None else None

    @property
    def has_baseline(self) -> bool:
        # False is a valid bucket, only a missing status/baseline is undefined
        return self.status is not None and self.status.baseline in (False, "low", "high")

    @property
    def support(self) -> Dict[str, str]:
        return dict(self.status.support) if self.status is not None else {}


@dataclass
class SpecLink:
    spec: SpecRecord
    compat_keys: List[str] = field(default_factory=list)
