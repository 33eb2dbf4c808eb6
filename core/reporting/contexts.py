from dataclasses import dataclass
from datetime import datetime
from typing import List

from core.services.portfolio import PortfolioSnapshot
from core.services.recovery import MonthlyRecoveryPoint, RecoveryPoint


@dataclass
class PortfolioReportContext:
    snapshot: PortfolioSnapshot


@dataclass
class RecoveryChartContext:
    project_name: str
    as_of: datetime
    monthly: List[MonthlyRecoveryPoint]
    to_date: RecoveryPoint
