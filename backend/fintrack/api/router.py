"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from fintrack.api.routes import analytics, auth, categories, health, transactions, users

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(transactions.router)
api_router.include_router(analytics.router)
api_router.include_router(categories.router)
api_router.include_router(health.router)
