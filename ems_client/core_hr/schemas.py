"""Core HR Pydantic schemas: employees, departments, positions, user accounts."""

from __future__ import annotations

from typing import Optional, Union

from pydantic import EmailStr

from ems_client.common.models import ApiModel


class Employee(ApiModel):
    id: Optional[int] = None
    full_name: str
    person_type: Optional[str] = None
    work_email: str
    personal_email: Optional[str] = None
    job_title: Optional[str] = None
    reference: Optional[str] = None
    date_of_joining: Optional[str] = None
    date_of_birth: Optional[str] = None
    phone_number: Optional[str] = None
    nationality: Optional[str] = None
    address: Optional[str] = None
    working_timing: Optional[str] = None
    holiday_allowance: Optional[float] = None
    employment_status: Optional[str] = None
    contract_type: Optional[str] = None
    user_id: Optional[int] = None
    username: Optional[str] = None
    department_id: Optional[int] = None
    department_name: Optional[str] = None
    allotted_organization: Optional[str] = None
    has_medical_condition: Optional[bool] = None
    medical_condition_details: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    emergency_contact_relationship: Optional[str] = None


class Department(ApiModel):
    id: Optional[Union[int, str]] = None
    name: str
    code: Optional[str] = None
    has_admin: Optional[bool] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None


class Position(ApiModel):
    id: int
    title: str
    description: Optional[str] = None


class UserCreateRequest(ApiModel):
    full_name: str
    email: EmailStr
    job_title: str
    person_type: str
    role: str
    date_of_joining: str
    employment_status: str
    personal_email: Optional[str] = None
    phone_number: Optional[str] = None
    date_of_birth: Optional[str] = None
    nationality: Optional[str] = None
    address: Optional[str] = None
    department_id: Optional[int] = None
    custom_department_name: Optional[str] = None
    reference: Optional[str] = None


class CreateUserResponse(ApiModel):
    employee_id: int
    user_id: int
    full_name: str
    email: str
    username: str
    temporary_password: Optional[str] = None
    role: str
    department_name: Optional[str] = None
    message: Optional[str] = None
    email_sent: bool = False
