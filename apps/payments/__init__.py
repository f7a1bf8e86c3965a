"""Payments app: hosted checkout sessions and gateway notifications."""
