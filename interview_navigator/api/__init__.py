"""
API layer for Interview Navigator

Contains FastAPI routers for:
- Pricing quotes
- Interviewer profiles, availability and ratings
- Booking lifecycle and payments
- Reviews
"""

from interview_navigator.api.router import api_router

__all__ = ["api_router"]
