from fastapi import APIRouter, Depends, HTTPException, status

from zein_bus.config import settings
from zein_bus.auth.dependencies import get_public_client
from zein_bus.areas.schemas import AreaList, UniversityList
from zein_bus.areas.service import AreaService
from zein_bus.backend.client import BackendClient

router = APIRouter()

@router.get("/", response_model=AreaList)
async def get_areas(client: BackendClient = Depends(get_public_client)):
    """Areas with pickup points and their fares"""
    areas = await AreaService(client).list_areas()
    return AreaList(areas=areas, total=len(areas))

@router.get("/universities", response_model=UniversityList)
async def get_universities(client: BackendClient = Depends(get_public_client)):
    """Universities and their colleges"""
    universities = await AreaService(client).list_universities()
    return UniversityList(
        universities=universities,
        total=len(universities),
        default_destination=settings.DEFAULT_DESTINATION
    )

@router.get("/{area_name}/places")
async def get_area_places(area_name: str, client: BackendClient = Depends(get_public_client)):
    """Pickup points of one area"""
    service = AreaService(client)
    areas = await service.list_areas()
    if not any(area.name == area_name for area in areas):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Area '{area_name}' not found"
        )
    places = service.places_in_area(areas, area_name)
    return {"area": area_name, "places": places, "total": len(places)}
