"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from app.api.v1.routes import teams, events, benchmarks, world, passthrough

api_router = APIRouter()

api_router.include_router(teams.router, tags=["Teams"])
api_router.include_router(events.router, tags=["Events"])
api_router.include_router(benchmarks.router, tags=["Benchmarks"])
api_router.include_router(world.router, tags=["World"])
api_router.include_router(passthrough.router, tags=["Passthrough"])
