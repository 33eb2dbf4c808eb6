from .models import PortfolioSnapshot, ProjectSummary
from .service import PortfolioService

__all__ = ["PortfolioService", "PortfolioSnapshot", "ProjectSummary"]
