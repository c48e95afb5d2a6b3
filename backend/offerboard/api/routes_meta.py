import os
from fastapi import APIRouter

from offerboard.core.config import settings

router = APIRouter(tags=["meta"])


@router.get("/")
def root():
    return {
        "name": "Offers Index API",
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "version": "/version",
    }


@router.get("/health")
def health():
    return {"ok": True}


@router.get("/version")
def version():
    return {
        "version": settings.APP_VERSION,
        "build": settings.BUILD_ID,
        "git_commit": os.environ.get("GIT_COMMIT"),
    }
