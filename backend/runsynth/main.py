import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from runsynth.api.activities import router as activities_router
from runsynth.core.config import settings


logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

app = FastAPI(title="runsynth")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(activities_router)


@app.get("/")
def root():
    return {"message": "runsynth backend is running"}
