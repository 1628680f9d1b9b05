from pydantic import BaseModel, ConfigDict, Field
from typing import List

class ModernScript(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    trigger: str
    contract: str
    vesting: str
    ritual: str

class Protocol(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    protocol_id: str = Field(min_length=1)
    name: str
    origin_culture: str
    category: str
    bug_fixed: str
    mechanism: str
    modern_script: ModernScript
    ethical_guardrails: List[str]
