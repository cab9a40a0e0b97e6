from typing import List, Optional
from uuid import UUID
from datetime import date, datetime
from pydantic import BaseModel, Field

from app.models.maintenance_task import TaskPriority, TaskStatus


class MaintenanceTaskBase(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    asset_id: str = Field(..., min_length=1)
    asset_name: str = Field(..., min_length=1)
    contractor: str = Field(..., min_length=1)
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.SCHEDULED
    scheduled_date: date
    estimated_duration: Optional[int] = Field(None, ge=0)
    estimated_cost: Optional[int] = Field(None, ge=0)
    actual_cost: Optional[int] = Field(None, ge=0)
    progress: int = Field(0, ge=0, le=100)
    materials: List[str] = []
    weather_sensitive: bool = False
    assigned_crew: Optional[str] = None
    pci_score: Optional[int] = Field(None, ge=0, le=100)


class MaintenanceTaskCreate(MaintenanceTaskBase):
    pass


class MaintenanceTaskUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    asset_id: Optional[str] = None
    asset_name: Optional[str] = None
    contractor: Optional[str] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    scheduled_date: Optional[date] = None
    estimated_duration: Optional[int] = Field(None, ge=0)
    estimated_cost: Optional[int] = Field(None, ge=0)
    actual_cost: Optional[int] = Field(None, ge=0)
    progress: Optional[int] = Field(None, ge=0, le=100)
    materials: Optional[List[str]] = None
    weather_sensitive: Optional[bool] = None
    assigned_crew: Optional[str] = None
    pci_score: Optional[int] = Field(None, ge=0, le=100)


class MaintenanceTask(MaintenanceTaskBase):
    id: UUID
    organization_id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
