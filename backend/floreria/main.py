"""
Module principal de l'application FastAPI de la Floristería.

Configure le logging, le cycle de vie du pool de connexions, CORS,
et inclut les routeurs publics (catalogue, commandes) et d'administration.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from floreria.admin.router import admin_router
from floreria.config import settings
from floreria.database import check_connection, dispose_engine
from floreria.orders.router import order_router
from floreria.products.router import product_router

# Configurer le logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not await check_connection():
        logger.warning("[Startup] PostgreSQL injoignable, les requêtes échoueront jusqu'au rétablissement.")
    yield
    await dispose_engine()


app = FastAPI(
    title="Floristería API",
    description="API du catalogue, des commandes, des référents et des comprobantes PDF.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

# ======================================================
# Inclure les routeurs
# ======================================================
app.include_router(product_router, prefix=settings.API_PREFIX)
app.include_router(order_router, prefix=settings.API_PREFIX)
app.include_router(admin_router, prefix=settings.API_PREFIX)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"[App] Erreur non gérée sur {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": settings.INTERNAL_ERROR_MSG})


@app.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def health_check():
    return "API de la Florería funcionando ✅"


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("floreria.main:app", host="0.0.0.0", port=settings.PORT)
