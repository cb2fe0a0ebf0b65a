"""
Main API router for Interview Navigator

Aggregates all API routes and provides the main application router.
"""

from fastapi import APIRouter

from interview_navigator.api.endpoints import pricing, interviewers, bookings, reviews

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(
    pricing.router,
    prefix="/pricing",
    tags=["Pricing"]
)

api_router.include_router(
    interviewers.router,
    prefix="/interviewers",
    tags=["Interviewers"]
)

api_router.include_router(
    bookings.router,
    prefix="/bookings",
    tags=["Bookings"]
)

api_router.include_router(
    reviews.router,
    prefix="/reviews",
    tags=["Reviews"]
)
