import logging
import os

from fastapi import FastAPI

from api.routers import ops, prioritize

# Logging configuration
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(title="task-prioritizer")
app.include_router(prioritize.router)
app.include_router(ops.router)
