import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from routers.admin import router as admin_router
from routers.attempts import router as attempts_router
from routers.health import router as health_router
from routers.marking import router as marking_router
from routers.problems import router as problems_router
from routers.stats import router as stats_router

logger = logging.getLogger("arithmetic-trainer")
logging.basicConfig(level=logging.INFO)

app = FastAPI(title="Arithmetic Trainer API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*", "x-api-key", "x-admin-token"],
)


@app.get("/")
def health_root():
    return {"ok": True}


app.include_router(problems_router)  # /problems, /problems/generate, /problems/difficulty
app.include_router(marking_router)  # /check, /evaluate, /mark, /mark-batch
app.include_router(attempts_router)  # /attempts/...
app.include_router(stats_router)  # /stats
app.include_router(admin_router)  # /admin/...
app.include_router(health_router)  # /health/...
