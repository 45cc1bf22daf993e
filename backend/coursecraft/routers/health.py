from datetime import datetime, timezone

from fastapi import APIRouter

from ..catalogue import available_domains
from ..settings import settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
	return {
		"status": "healthy",
		"service": "CourseCraft Strategy Engine",
		"timestamp": datetime.now(timezone.utc).isoformat(),
		"narrative_generator": "active" if settings.generator_configured else "fallback",
		"model": settings.gemini_model,
		"available_domains": available_domains(),
	}
