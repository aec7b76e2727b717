"""EMS client: session, services and screens for the Employee Management System API."""

__version__ = "1.0.0"
