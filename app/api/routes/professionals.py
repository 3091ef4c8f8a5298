"""Professional routes - Profiles and discovery."""

from typing import Annotated

from fastapi import APIRouter, Query

from app.api.deps import Caller, DBSession
from app.schemas.common import Pagination
from app.schemas.professional import (
    ProfessionalCreate,
    ProfessionalFilters,
    ProfessionalResponse,
    ProfessionalList,
)
from app.services.professional_service import ProfessionalService

router = APIRouter()


@router.post("/", response_model=ProfessionalResponse, status_code=201)
async def create_professional(professional_data: ProfessionalCreate, caller: Caller, db: DBSession):
    """Create the caller's professional profile."""
    service = ProfessionalService(db)
    return await service.create_professional(caller, professional_data)


@router.get("/", response_model=ProfessionalList)
async def get_professionals(filters: Annotated[ProfessionalFilters, Query()], db: DBSession):
    """Browse professionals, best rated first."""
    service = ProfessionalService(db)
    professionals, total = await service.get_professionals(filters)
    return ProfessionalList(
        professionals=professionals,
        pagination=Pagination.build(filters, total),
    )


@router.get("/{professional_id}", response_model=ProfessionalResponse)
async def get_professional(professional_id: int, db: DBSession):
    """Get a professional by ID."""
    service = ProfessionalService(db)
    return await service.get_professional(professional_id)
