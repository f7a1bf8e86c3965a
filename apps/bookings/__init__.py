"""Bookings app package.

Flight and hotel bookings created from cached search offers, their
passenger and guest manifests, and the unpaid-booking expiry task.
"""
