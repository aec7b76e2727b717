"""Core HR module: Employee, Department, Position schemas and services."""

from ems_client.core_hr.schemas import Department, Employee, Position

__all__ = ["Employee", "Department", "Position"]
