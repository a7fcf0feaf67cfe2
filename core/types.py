from dataclasses import dataclass, field
from typing import Protocol, List, Dict, Any, Optional


@dataclass
class LabTest:
    name: str
    result: str
    status: str  # "negative" | "positive" | "pending" | "inconclusive"
    notes: Optional[str] = None


@dataclass
class ReportData:
    patient_name: Optional[str]
    collection_date: Optional[str]
    lab_name: Optional[str]
    tests: List[LabTest] = field(default_factory=list)
    flags: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ResultItem:
    metric: str
    value: Optional[str]
    interpretation: str
    severity: str  # test status or "info"
    category: str = "Other"
    rank: int = 999


class ResultModule(Protocol):
    id: str
    title: str
    def inputs(self, data: ReportData) -> ReportData: ...
    def compute(self, data: ReportData) -> List[ResultItem]: ...
    def render(self, results: List[ResultItem]) -> None: ...
    def to_pdf(self, results: List[ResultItem]) -> List[list[str]]: ...
