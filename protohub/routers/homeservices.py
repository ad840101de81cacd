from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from protohub.core.cache import get_cache
from protohub.core.database import get_session
from protohub.dependencies.rate_limit import rate_limit
from protohub.schemas.homeservices import (
    ContactRequest,
    ContactResponse,
    ProfessionalOut,
    ServiceOut,
    ServiceTestimonialOut,
)
from protohub.services import homeservices as home_service

logger = get_logger()
router = APIRouter(prefix="/api", tags=["home services"])


@router.get("/services", response_model=List[ServiceOut], dependencies=[rate_limit(30, 60)])
async def list_services(db: AsyncSession = Depends(get_session), cache: Optional[Redis] = Depends(get_cache)):
    try:
        return await home_service.list_services(db, cache)
    except Exception as e:
        logger.error("Failed to fetch services", error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch services")


@router.get("/services/slug/{slug}", response_model=ServiceOut)
async def get_service_by_slug(slug: str, db: AsyncSession = Depends(get_session)):
    service = await home_service.get_service_by_slug(db, slug)
    if service is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service not found")
    return service


@router.get("/services/{service_id}", response_model=ServiceOut)
async def get_service(service_id: int, db: AsyncSession = Depends(get_session)):
    service = await home_service.get_service(db, service_id)
    if service is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service not found")
    return service


@router.get("/professionals", response_model=List[ProfessionalOut], dependencies=[rate_limit(30, 60)])
async def list_professionals(
    profession: Optional[str] = None,
    db: AsyncSession = Depends(get_session),
    cache: Optional[Redis] = Depends(get_cache),
):
    try:
        return await home_service.list_professionals(db, cache, profession=profession)
    except Exception as e:
        logger.error("Failed to fetch professionals", profession=profession, error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch professionals")


@router.get("/professionals/{professional_id}", response_model=ProfessionalOut)
async def get_professional(professional_id: int, db: AsyncSession = Depends(get_session)):
    professional = await home_service.get_professional(db, professional_id)
    if professional is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Professional not found")
    return professional


@router.get("/service-testimonials", response_model=List[ServiceTestimonialOut], dependencies=[rate_limit(30, 60)])
async def list_service_testimonials(db: AsyncSession = Depends(get_session), cache: Optional[Redis] = Depends(get_cache)):
    try:
        return await home_service.list_service_testimonials(db, cache)
    except Exception as e:
        logger.error("Failed to fetch testimonials", error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch testimonials")


@router.get("/service-testimonials/{testimonial_id}", response_model=ServiceTestimonialOut)
async def get_service_testimonial(testimonial_id: int, db: AsyncSession = Depends(get_session)):
    testimonial = await home_service.get_service_testimonial(db, testimonial_id)
    if testimonial is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Testimonial not found")
    return testimonial


@router.post("/contact", response_model=ContactResponse, dependencies=[rate_limit(5, 60)])
async def submit_contact(request: ContactRequest, db: AsyncSession = Depends(get_session)):
    try:
        submission_id = await home_service.save_contact_form(db, request)
        return {"message": "Contact form submitted successfully", "id": submission_id}
    except Exception as e:
        logger.error("Contact form failed", error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to submit contact form")
