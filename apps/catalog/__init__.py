"""Catalog app: airports, managed airlines and hotel chains curated by admins."""
