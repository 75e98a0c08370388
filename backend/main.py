"""HackPot API application."""

import logging

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from config import LOG_LEVEL, validate_config
from routers import achievements, admin, users


logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

validate_config()

app = FastAPI(title="HackPot API", version="0.1.0")

app.state.limiter = achievements.limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.include_router(achievements.router, prefix="/api/v1/achievements", tags=["achievements"])
app.include_router(users.router, prefix="/api/v1/users", tags=["users"])
app.include_router(admin.router, prefix="/api/v1/admin/achievements", tags=["admin"])


@app.get("/health")
def health():
    return {"status": "ok"}
