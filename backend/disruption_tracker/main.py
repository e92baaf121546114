from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from loguru import logger

from disruption_tracker.config import settings
from disruption_tracker.database import engine, init_db
from disruption_tracker.nlp import TextClassifier, load_vocabulary
from disruption_tracker.services.cache import MemoryCache
from disruption_tracker.services.ingestion import IngestionOrchestrator
from disruption_tracker.services.sources import build_source_families
from disruption_tracker.services.store import FeedStore
from disruption_tracker.api.v1 import posts, trending, admin, cron, funding, health, scheduler


def configure_services(app: FastAPI, bind=None) -> IngestionOrchestrator:
    """
    Build the store, cache, classifier and orchestrator and attach them to app.state

    Args:
        app: Application whose state receives the services
        bind: Engine to use instead of the configured one

    Returns:
        The orchestrator
    """
    classifier = TextClassifier(load_vocabulary(settings.VOCABULARY_FILE))
    store = FeedStore(bind or engine)
    cache = MemoryCache()
    orchestrator = IngestionOrchestrator(
        store=store,
        cache=cache,
        families=build_source_families(classifier),
        classifier=classifier,
    )

    app.state.classifier = classifier
    app.state.store = store
    app.state.cache = cache
    app.state.orchestrator = orchestrator
    app.state.scheduler = None
    return orchestrator


# Lifespan context manager for startup and shutdown
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting AI Disruption Tracker API...")
    logger.info(f"Initializing database at {engine.url.render_as_string(hide_password=True)}")
    init_db()
    logger.info("Database initialized successfully")

    orchestrator = configure_services(app)

    if settings.SCHEDULER_ENABLED:
        from disruption_tracker.scheduler import SchedulerService
        logger.info("Initializing scheduler...")
        scheduler_service = SchedulerService(orchestrator, app.state.store, app.state.cache)
        scheduler_service.initialize()
        scheduler_service.start()
        app.state.scheduler = scheduler_service
        logger.info("Scheduler started successfully")

    yield

    # Shutdown
    logger.info("Shutting down AI Disruption Tracker API...")
    if app.state.scheduler is not None:
        logger.info("Stopping scheduler...")
        app.state.scheduler.shutdown()
        logger.info("Scheduler stopped")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Aggregates AI-industry social posts, news and funding rounds",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, prefix="/api/v1")
app.include_router(posts.router, prefix="/api/v1")
app.include_router(trending.router, prefix="/api/v1")
app.include_router(admin.router, prefix="/api/v1")
app.include_router(cron.router, prefix="/api/v1")
app.include_router(funding.router, prefix="/api/v1")
app.include_router(scheduler.router, prefix="/api/v1")


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/api/v1/health"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "disruption_tracker.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
