from typing import List, Optional

from redis.asyncio import Redis
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from protohub.core.cache import cached_json
from protohub.models.homeservices import ContactSubmission, Professional, Service, ServiceTestimonial
from protohub.schemas.homeservices import (
    ContactRequest,
    ProfessionalOut,
    ServiceOut,
    ServiceTestimonialOut,
)

logger = get_logger()


async def list_services(db: AsyncSession, cache: Optional[Redis] = None) -> List[dict]:
    async def load():
        result = await db.execute(select(Service).order_by(Service.id))
        return [ServiceOut.model_validate(row).model_dump(mode="json") for row in result.scalars().all()]
    return await cached_json(cache, "home:services", load)


async def get_service(db: AsyncSession, service_id: int) -> Optional[Service]:
    return await db.get(Service, service_id)


async def get_service_by_slug(db: AsyncSession, slug: str) -> Optional[Service]:
    result = await db.execute(select(Service).where(Service.slug == slug))
    return result.scalars().first()


async def list_professionals(
    db: AsyncSession,
    cache: Optional[Redis] = None,
    profession: Optional[str] = None,
) -> List[dict]:
    profession = profession.strip().lower() if profession else None

    async def load():
        query = select(Professional).order_by(Professional.id)
        if profession:
            query = query.where(func.lower(Professional.profession) == profession)
        result = await db.execute(query)
        return [ProfessionalOut.model_validate(row).model_dump(mode="json") for row in result.scalars().all()]
    return await cached_json(cache, f"home:professionals:{profession or 'all'}", load)


async def get_professional(db: AsyncSession, professional_id: int) -> Optional[Professional]:
    return await db.get(Professional, professional_id)


async def list_service_testimonials(db: AsyncSession, cache: Optional[Redis] = None) -> List[dict]:
    async def load():
        result = await db.execute(select(ServiceTestimonial).order_by(ServiceTestimonial.id))
        return [ServiceTestimonialOut.model_validate(row).model_dump(mode="json") for row in result.scalars().all()]
    return await cached_json(cache, "home:testimonials", load)


async def get_service_testimonial(db: AsyncSession, testimonial_id: int) -> Optional[ServiceTestimonial]:
    return await db.get(ServiceTestimonial, testimonial_id)


async def save_contact_form(db: AsyncSession, request: ContactRequest) -> int:
    submission = ContactSubmission(
        name=request.name,
        email=str(request.email),
        subject=request.subject,
        message=request.message,
    )
    db.add(submission)
    await db.commit()
    await db.refresh(submission)
    logger.info("Contact form stored", submission_id=submission.id, subject=request.subject)
    return submission.id
