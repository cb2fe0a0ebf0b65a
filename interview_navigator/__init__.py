"""
Interview Navigator - Mock Interview Marketplace Backend

Booking, pricing, availability and interviewer rating services for a
marketplace where candidates book paid practice interviews with human
interviewers.
"""

__version__ = "0.1.0"
__author__ = "Interview Navigator Team"
