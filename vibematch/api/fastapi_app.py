from fastapi import FastAPI

from vibematch.api.health import router as health_router
from vibematch.api.matching.routes import router as matching_router
from vibematch.api.swipes.routes import router as swipes_router
from vibematch.config import LOG_LEVEL
from vibematch.core import configure_logging

configure_logging(LOG_LEVEL)

app = FastAPI(
    title="Vibematch API",
    version="0.1.0",
    description="Music-taste compatibility scoring and swipe matching.",
)

app.include_router(health_router, tags=["health"])
app.include_router(matching_router, prefix="/matching", tags=["matching"])
app.include_router(swipes_router, tags=["swipes"])
