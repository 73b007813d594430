from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.routers import reservations
from app.config import settings
from app.utils.logging_config import setup_logging
from app.utils.exception_handlers import register_exception_handlers
from app.middleware.logging_middleware import log_requests


logger = setup_logging(log_to_file=settings.log_to_file)
logger.info("Application starting...")
app = FastAPI(title=settings.app_name, debug=settings.debug)

app.middleware("http")(log_requests)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(reservations.router)

@app.get("/health")
def health() -> dict:
        return {"status": "ok"}
