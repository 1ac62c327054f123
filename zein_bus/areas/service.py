from typing import List, Optional

from zein_bus.areas.schemas import Area, University
from zein_bus.backend.client import BackendClient
from zein_bus.bookings.schemas import PricePoint

class AreaService:
    def __init__(self, client: BackendClient):
        self.client = client

    async def list_areas(self) -> List[Area]:
        """Areas with their pickup points and fare tables"""
        areas = await self.client.fetch_areas()
        return sorted(areas, key=lambda a: a.name)

    async def list_universities(self) -> List[University]:
        return await self.client.fetch_universities()

    @staticmethod
    def places_in_area(areas: List[Area], area_name: Optional[str]) -> List[PricePoint]:
        """Pickup points of the named area; empty if the area is unknown"""
        if not area_name:
            return []
        for area in areas:
            if area.name == area_name:
                return list(area.places)
        return []

    @staticmethod
    def find_place(places: List[PricePoint], place_name: Optional[str]) -> Optional[PricePoint]:
        if not place_name:
            return None
        for place in places:
            if place.name == place_name:
                return place
        return None
