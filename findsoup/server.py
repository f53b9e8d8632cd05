"""FastAPI server exposing the soup and cuisine classifiers."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from findsoup.classifiers import classify, validate
from findsoup.config import get_config, setup_logging
from findsoup.models import RestaurantSignal
from findsoup.services.audit_service import AuditService
from findsoup.services.restaurant_store import InMemoryRestaurantStore
from findsoup.taxonomy import get_taxonomy

logger = logging.getLogger(__name__)


class ValidateRequest(BaseModel):
    """Body of a validation request."""

    signal: RestaurantSignal = Field(..., description="Restaurant the soups belong to")
    soup_types: list[str] = Field(default_factory=list, description="Assigned soup types")


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application lifespan manager."""
    config = get_config()
    logger.info(f"Starting FindSoup API on {config.server_host}:{config.server_port}")

    taxonomy = get_taxonomy()

    if config.restaurants_file and config.restaurants_file.exists():
        store = InMemoryRestaurantStore.from_json_file(config.restaurants_file)
    else:
        store = InMemoryRestaurantStore()
        logger.info("No restaurants file configured, starting with an empty store")

    _app.state.taxonomy = taxonomy
    _app.state.audit_service = AuditService(store, taxonomy)

    yield

    logger.info("Shutting down FindSoup API")


app = FastAPI(
    title="FindSoup API",
    description="Cuisine and soup type classification for FindSoupNearMe",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_audit_service(request: Request) -> AuditService:
    """Dependency to get the audit service from app state.

    Raises:
        HTTPException: If the store is not loaded yet
    """
    service = getattr(request.app.state, "audit_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Restaurant store not loaded yet")
    return service


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "service": "findsoup-api"}


@app.post("/classify")
async def classify_restaurant(signal: RestaurantSignal, request: Request):
    """Detect cuisines and soup types for one restaurant.

    Request body:
        {
            "name": "Pho 88",
            "category_tags": ["vietnamese_restaurant"],
            "free_text": "",
            "search_query_hint": null
        }

    Returns:
        {"cuisines": ["vietnamese"], "soup_types": ["Pho"]}
    """
    try:
        result = classify(signal, request.app.state.taxonomy)
        logger.info(
            f"Classified {signal.name!r}: {', '.join(c.value for c in result.cuisines) or 'no cuisine'}"
            f" / {', '.join(result.soup_types)}"
        )
        return result.model_dump(mode="json")

    except Exception as e:
        logger.exception("Error classifying restaurant")
        return JSONResponse(status_code=500, content={"success": False, "error": str(e)})


@app.post("/validate")
async def validate_assignment(body: ValidateRequest, request: Request):
    """Check assigned soups against the restaurant's cuisines."""
    try:
        report = validate(body.signal, body.soup_types, request.app.state.taxonomy)
        return report.model_dump(mode="json")

    except Exception as e:
        logger.exception("Error validating soup assignment")
        return JSONResponse(status_code=500, content={"success": False, "error": str(e)})


@app.get("/audit")
async def audit(service: AuditService = Depends(get_audit_service)):
    """Stored restaurants whose soups need review."""
    try:
        return [issue.model_dump() for issue in service.audit_assignments()]

    except Exception as e:
        logger.exception("Error auditing soup assignments")
        return JSONResponse(status_code=500, content={"success": False, "error": str(e)})


@app.get("/audit/changes")
async def audit_changes(service: AuditService = Depends(get_audit_service)):
    """Restaurants whose soups would change if re-detected."""
    try:
        return [change.model_dump() for change in service.plan_soup_updates()]

    except Exception as e:
        logger.exception("Error planning soup updates")
        return JSONResponse(status_code=500, content={"success": False, "error": str(e)})


def run_server():
    """Run the FastAPI server using uvicorn.

    This is the main entry point for the server.
    """
    setup_logging()
    config = get_config()

    uvicorn.run(
        "findsoup.server:app",
        host=config.server_host,
        port=config.server_port,
        log_level=config.log_level.lower(),
        reload=False,
    )


if __name__ == "__main__":
    run_server()
