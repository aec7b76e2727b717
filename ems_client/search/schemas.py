"""Global search result schemas."""

from __future__ import annotations

from typing import List, Optional

from ems_client.common.models import ApiModel
from ems_client.core_hr.schemas import Employee
from ems_client.documents.schemas import Document
from ems_client.leave.schemas import Leave


class RotaSearchResult(ApiModel):
    id: int
    department: Optional[str] = None
    file_name: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    uploaded_date: Optional[str] = None


class SearchResults(ApiModel):
    employees: List[Employee] = []
    documents: List[Document] = []
    leaves: List[Leave] = []
    rotas: List[RotaSearchResult] = []

    @property
    def total(self) -> int:
        return len(self.employees) + len(self.documents) + len(self.leaves) + len(self.rotas)
