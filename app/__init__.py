"""
Appointment Booking System

A FastAPI backend for booking fixed half-hour appointment slots, with
token authentication and patient/admin roles.
"""

__version__ = "1.0.0"
