# app/api/v1/api.py

from fastapi import APIRouter
from app.api.v1.endpoints import admin, clubs, health, reservations, rooms, users

# Main router for the v1 API; main.py mounts it under /api/v1.
api_router = APIRouter()

api_router.include_router(health.router)
api_router.include_router(reservations.router)
api_router.include_router(rooms.router)
api_router.include_router(users.router)
api_router.include_router(clubs.router)
api_router.include_router(admin.router)
