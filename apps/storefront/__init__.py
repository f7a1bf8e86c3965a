"""Storefront app: admin-editable application settings and pricing rules."""
