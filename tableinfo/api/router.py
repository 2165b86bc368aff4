from fastapi import APIRouter
from tableinfo.api.endpoints import schema

api_router = APIRouter()

# Combine all sub-routers into one
api_router.include_router(schema.router)
