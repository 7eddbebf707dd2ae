"""Moderation backend for car-rental listings."""
