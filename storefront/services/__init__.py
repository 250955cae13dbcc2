"""Storefront services: money arithmetic."""
