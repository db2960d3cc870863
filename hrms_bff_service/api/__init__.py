"""HRMS BFF Service API module."""
