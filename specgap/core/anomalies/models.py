from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, Field

from specgap.core.features.models import Baseline


class AnomalyCategory(str, Enum):
    LATE_INCUBATION = "late-incubation"
    LATE_WORKING_DRAFT = "late-working-draft"
    NOT_YET_INTEROPERABLE = "not-yet-interoperable-implementation"


class SpecRef(BaseModel):
    shortname: str
    url: str


class AnomalyRecord(BaseModel):
    category: AnomalyCategory
    baseline: Baseline
    feature: str
    spec: SpecRef
    compat_keys: List[str] = Field(default_factory=list)
    pseudo: bool = False
