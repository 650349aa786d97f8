import logging
import sqlite3
from contextlib import asynccontextmanager
from fastapi import FastAPI

from jobly.config import settings
from jobly.database import init_db
from jobly.errors import register_error_handlers
from jobly.routers import auth, companies, jobs, users
from jobly.utils.security import TokenService

logger = logging.getLogger("jobly")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create the schema, then integrity-check it
    settings.data_path.mkdir(parents=True, exist_ok=True)
    try:
        init_db(settings.db_path)
        conn = sqlite3.connect(str(settings.db_path))
        result = conn.execute("PRAGMA integrity_check").fetchone()
        conn.close()
        if result and result[0] == "ok":
            logger.info("Database integrity check passed.")
        else:
            logger.error("DATABASE INTEGRITY CHECK FAILED: %s", result)
    except sqlite3.Error as exc:
        logger.error("Could not run startup schema/integrity check: %s", exc)
    yield


app = FastAPI(
    title="Jobly",
    description="Companies, jobs and users behind a token-authenticated REST API",
    version="0.1.0",
    lifespan=lifespan,
)

app.state.tokens = TokenService(
    settings.secret_key,
    algorithm=settings.jwt_algorithm,
    ttl_seconds=settings.token_ttl_seconds,
)

register_error_handlers(app)

app.include_router(auth.router, prefix=settings.api_prefix)
app.include_router(companies.router, prefix=settings.api_prefix)
app.include_router(jobs.router, prefix=settings.api_prefix)
app.include_router(users.router, prefix=settings.api_prefix)


@app.get("/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}


def run():
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run("jobly.main:app", host=settings.host, port=settings.port)
