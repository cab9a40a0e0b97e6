from typing import Optional
from uuid import UUID
from datetime import date, datetime
from pydantic import BaseModel, Field


class AssetCreate(BaseModel):
    name: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1, max_length=50)
    address: Optional[str] = None
    lat: Optional[float] = Field(None, ge=-90, le=90)
    lng: Optional[float] = Field(None, ge=-180, le=180)
    condition: str = "good"
    pci: Optional[int] = Field(None, ge=0, le=100)
    install_date: Optional[date] = None
    last_inspection: Optional[date] = None
    cost: Optional[int] = Field(None, ge=0)


class AssetUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    type: Optional[str] = Field(None, min_length=1, max_length=50)
    address: Optional[str] = None
    lat: Optional[float] = Field(None, ge=-90, le=90)
    lng: Optional[float] = Field(None, ge=-180, le=180)
    condition: Optional[str] = None
    pci: Optional[int] = Field(None, ge=0, le=100)
    install_date: Optional[date] = None
    last_inspection: Optional[date] = None
    cost: Optional[int] = Field(None, ge=0)


class Asset(AssetCreate):
    id: UUID
    organization_id: UUID
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
