from typing import Dict, Optional
from datetime import datetime
from pydantic import BaseModel, Field


class PlanMatrixResponse(BaseModel):
    requested_plan: str
    resolved_plan: str
    version: str
    dashboard: Dict[str, str]
    navMenu: Dict[str, str]
    pages: Dict[str, str]


class FeatureResolution(BaseModel):
    requested_plan: str
    resolved_plan: str
    feature: str
    state: str
    upgrade_to: Optional[str] = None
    upgrade_message: Optional[str] = None


class FeatureMatrixCell(BaseModel):
    plan_type: str
    feature_section: str
    feature_name: str
    feature_state: str
    description: Optional[str] = None
    overridden: bool = False
    last_updated: Optional[datetime] = None


class FeatureMatrixUpdate(BaseModel):
    plan_type: str = Field(..., alias="planType")
    feature_section: str = Field(..., alias="featureSection")
    feature_name: str = Field(..., alias="featureName")
    feature_state: str = Field(..., alias="featureState")
    description: Optional[str] = None

    class Config:
        populate_by_name = True
