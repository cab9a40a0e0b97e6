from typing import List, Optional
from uuid import UUID
from datetime import date, datetime
from pydantic import BaseModel, Field

from app.models.maintenance_task import TaskPriority, TaskStatus


class Coordinates(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class RoadInspectionBase(BaseModel):
    road_id: str = Field(..., min_length=1)
    road_name: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1, max_length=500)
    coordinates: Coordinates
    inspector: str = Field(..., min_length=1)
    inspection_date: date
    status: TaskStatus = TaskStatus.SCHEDULED
    priority: TaskPriority = TaskPriority.MEDIUM
    pci_score: Optional[int] = Field(None, ge=0, le=100)
    surface_type: Optional[str] = None
    distress_types: List[str] = []
    photos: int = Field(0, ge=0)
    weather_conditions: Optional[str] = None
    traffic_volume: Optional[str] = None
    findings: Optional[str] = None
    recommendations: Optional[str] = None


class RoadInspectionCreate(RoadInspectionBase):
    pass


class RoadInspectionUpdate(BaseModel):
    road_id: Optional[str] = None
    road_name: Optional[str] = None
    location: Optional[str] = Field(None, max_length=500)
    coordinates: Optional[Coordinates] = None
    inspector: Optional[str] = None
    inspection_date: Optional[date] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    pci_score: Optional[int] = Field(None, ge=0, le=100)
    surface_type: Optional[str] = None
    distress_types: Optional[List[str]] = None
    photos: Optional[int] = Field(None, ge=0)
    weather_conditions: Optional[str] = None
    traffic_volume: Optional[str] = None
    findings: Optional[str] = None
    recommendations: Optional[str] = None


class RoadInspection(RoadInspectionBase):
    id: UUID
    organization_id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
