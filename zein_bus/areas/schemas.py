from pydantic import BaseModel
from typing import List, Optional

from zein_bus.bookings.schemas import PricePoint

class Area(BaseModel):
    """Residential area served by the buses, with its pickup points"""
    id: str
    name: str
    places: List[PricePoint] = []

class College(BaseModel):
    id: str
    name: str

class University(BaseModel):
    id: str
    name: str
    colleges: List[College] = []

class AreaList(BaseModel):
    areas: List[Area]
    total: int

class UniversityList(BaseModel):
    universities: List[University]
    total: int
    default_destination: Optional[str] = None
