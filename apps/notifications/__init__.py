"""Notifications app package.

Transactional emails for registrations, password resets and bookings, and
the Celery tasks that deliver them.
"""
