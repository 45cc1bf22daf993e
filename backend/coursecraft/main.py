import asyncio
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .cleanup import purge_stale_sessions
from .db import Base, SessionLocal, engine
from .errors import ExternalServiceError, MalformedInputError
from .settings import settings
from .routers import health
from .routers import content
from .routers import sme
from .routers import strategy

logging.basicConfig(
	level=getattr(logging, settings.log_level.upper(), logging.INFO),
	format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="CourseCraft Strategy Engine")
app.include_router(health.router)
app.include_router(content.router)
app.include_router(sme.router)
app.include_router(strategy.router)


@app.exception_handler(MalformedInputError)
async def malformed_input_handler(request: Request, exc: MalformedInputError):
	return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(ExternalServiceError)
async def external_service_handler(request: Request, exc: ExternalServiceError):
	return JSONResponse(status_code=502, content={"detail": str(exc), "service": exc.service})


def _purge_once() -> None:
	if settings.session_store != "sql":
		return
	db = SessionLocal()
	try:
		removed = purge_stale_sessions(db, days=settings.session_ttl_days)
		if removed:
			logger.info("Purged %d stale sessions", removed)
	except Exception:
		logger.exception("Session cleanup failed")
	finally:
		db.close()


async def _cleanup_watcher():
	# Runs daily after the startup purge
	while True:
		await asyncio.sleep(24 * 60 * 60)
		_purge_once()


@app.on_event("startup")
async def startup_event():
	Base.metadata.create_all(bind=engine)
	_purge_once()
	asyncio.create_task(_cleanup_watcher())
