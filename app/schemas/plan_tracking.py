from typing import Optional
from datetime import datetime
from pydantic import BaseModel


class PlanTrackingUpdate(BaseModel):
    implementation_status: Optional[str] = None
    plan_restrictions_implemented: Optional[bool] = None
    free_plan_behavior: Optional[str] = None
    basic_plan_behavior: Optional[str] = None
    pro_plan_behavior: Optional[str] = None
    premium_plan_behavior: Optional[str] = None
    enterprise_plan_behavior: Optional[str] = None
    implementation_notes: Optional[str] = None
    implemented_by: Optional[str] = None


class PlanTracking(BaseModel):
    id: int
    page_name: str
    page_path: str
    implementation_status: Optional[str] = None
    plan_restrictions_implemented: Optional[bool] = False
    free_plan_behavior: Optional[str] = None
    basic_plan_behavior: Optional[str] = None
    pro_plan_behavior: Optional[str] = None
    premium_plan_behavior: Optional[str] = None
    enterprise_plan_behavior: Optional[str] = None
    implementation_notes: Optional[str] = None
    implemented_by: Optional[str] = None
    last_updated: Optional[datetime] = None

    class Config:
        from_attributes = True
