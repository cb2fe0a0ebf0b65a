"""
API endpoint modules for Interview Navigator
"""

from interview_navigator.api.endpoints import pricing, interviewers, bookings, reviews

__all__ = ["pricing", "interviewers", "bookings", "reviews"]
