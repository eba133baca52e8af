import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from settlement.core.config import settings
from settlement.routers import settlements

logging.basicConfig(level=settings.LOG_LEVEL)

OPENAPI_TAGS = [
    {
        "name": "Settlements",
        "description": "Settle pending invoices, deducting credit notes.",
    },
]

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.version,
    description=(
        "Settles pending invoices per organization, funding payments with "
        "previously issued credit notes."
    ),
    openapi_tags=OPENAPI_TAGS,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(settlements.router, prefix="/v1/settlements", tags=["Settlements"])


@app.get("/")
async def root() -> dict[str, str]:
    return {
        "app": settings.APP_NAME,
        "version": settings.version,
        "status": "running",
    }
