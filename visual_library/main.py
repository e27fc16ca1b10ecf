import logging
from typing import Dict

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .catalog_routes import router as catalog_router
from .config import Settings, get_settings
from .list_routes import router as list_router
from .logging_config import configure_logging
from .practice_routes import router as practice_router


configure_logging()
logger = logging.getLogger(__name__)
app = FastAPI(title="Visual Library Trainer", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(catalog_router)
app.include_router(list_router)
app.include_router(practice_router)

settings_snapshot = get_settings()
logger.info("Trainer starting with default algorithm: %s", settings_snapshot.default_algorithm)
logger.info("Practice store persisted to disk: %s", settings_snapshot.store_path is not None)


@app.get("/healthz")
def health(settings: Settings = Depends(get_settings)) -> Dict[str, str]:
    return {
        "status": "ok",
        "default_algorithm": settings.default_algorithm,
        "store": "file" if settings.store_path else "memory",
    }
