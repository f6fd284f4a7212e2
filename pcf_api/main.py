from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from pcf_api.config import configure_logging
from pcf_api.routers import datasets, graphs, health, pcf, projects
from pcf_api.domain.errors import NotFoundError, ValidationError, ConflictError, CatalogUnavailableError
from pcf_api.application.event_handlers import register_event_handlers
from pcf_api.db.init_db import init_database

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # Register domain event handlers and make sure the catalog tables exist
    register_event_handlers()
    init_database()
    logger.info("PCF API started")
    yield

app = FastAPI(
    title="PCF API",
    description="Product carbon footprint accounting: dataset catalog, process graphs and emission results",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allows all origins
    allow_credentials=True,
    allow_methods=["*"],  # Allows all methods
    allow_headers=["*"],  # Allows all headers
)


# Domain error handlers
@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(ConflictError)
async def conflict_error_handler(request: Request, exc: ConflictError):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(CatalogUnavailableError)
async def catalog_unavailable_handler(request: Request, exc: CatalogUnavailableError):
    logger.warning(f"Catalog unavailable for {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"detail": str(exc)})

# Include routers
app.include_router(health.router, tags=["Health"])  # Health check endpoints first
app.include_router(datasets.router, tags=["Datasets"])
app.include_router(projects.router, tags=["Projects"])
app.include_router(graphs.router, tags=["Graphs"])
app.include_router(pcf.router, tags=["PCF"])

@app.get("/")
async def root():
    return {"message": "Welcome to the PCF API. See /docs for API documentation"}
