import logging

from fastapi import FastAPI
from reqdash.api.endpoints import dashboard
from reqdash.api.endpoints import jira


from fastapi.middleware.cors import CORSMiddleware
from reqdash.core.config import Settings

settings = Settings()
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
app.include_router(jira.router, prefix="/jira", tags=["jira"])
