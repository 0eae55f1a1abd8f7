from fastapi import FastAPI

from config.exceptions import configure_exception_handlers
from config.logging import init_logging
from config.sentry import init_sentry
from config.settings import get_settings
from routers.api import introspection

init_logging(get_settings().log_level)
init_sentry()

app = FastAPI(
    title="Introspection",
    version="0.1.0",
    description="Normalizes application bundle metadata and hardware model identifiers",
)

configure_exception_handlers(app)

app.include_router(introspection.router)
