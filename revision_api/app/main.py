import logging
import os

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routers import admission_webhook
from .routers import revisions

LOG_LEVEL = os.getenv("LOG_LEVEL", "info").lower()

logging.basicConfig(
    level=LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# ---------- FastAPI app ----------
app = FastAPI(
    title="Revision API",
    version="v1alpha1"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------- Routers ----------
app.include_router(revisions.router)
app.include_router(admission_webhook.router)


def run():
    uvicorn.run(
        "revision_api.app.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8080")),
        workers=int(os.getenv("WORKERS", "4")),
        log_level=LOG_LEVEL,
    )


if __name__ == "__main__":
    run()
