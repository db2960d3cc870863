"""Shared building blocks for HRMS services: logging, errors, settings."""
