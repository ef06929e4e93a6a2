"""
Test suite for the Appointment Booking API.

Contains unit tests for the access rules and stores, and API tests that run
the application against a throwaway SQLite database.
"""
import os

# Set environment for testing
os.environ["TESTING"] = "1"
