from pydantic import BaseModel, Field


class ProjectRules(BaseModel):
    slug: str
    rules_version: str = "1"

class IssuanceRules(BaseModel):
    validity_days: int = Field(default=28, gt=0)
    weeks_per_pass: int = Field(default=4, gt=0)
    past_start_tolerance_days: int = Field(default=1, ge=0)

class PassesRules(BaseModel):
    expiring_window_days: int = Field(default=7, ge=0)

class StudioRules(BaseModel):
    project: ProjectRules
    issuance: IssuanceRules = Field(default_factory=IssuanceRules)
    passes: PassesRules = Field(default_factory=PassesRules)
