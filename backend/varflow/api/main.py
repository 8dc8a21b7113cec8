from fastapi import APIRouter

from varflow.api.routes import (
    charts,
    datasources,
    scripts,
    sessions,
    tables,
    utils,
    variables,
)

api_router = APIRouter()
api_router.include_router(utils.router)
api_router.include_router(sessions.router)
api_router.include_router(datasources.router)
api_router.include_router(scripts.router)
api_router.include_router(variables.router)
api_router.include_router(charts.router)
api_router.include_router(tables.router)
