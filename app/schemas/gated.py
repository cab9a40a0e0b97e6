from typing import Any, Dict, List, Optional
from pydantic import BaseModel


class GatedDataResponse(BaseModel):
    feature: str
    state: str
    data_source: str
    locked: bool = False
    items: List[Dict[str, Any]] = []
    upgrade_message: Optional[str] = None
