# This project was developed with assistance from AI tools.
__version__ = "0.1.0"

from .database import Base, DatabaseService, get_db, get_db_service
from .enums import ApplicationStage, UserRole
from .models import (
    Application,
    ApplicationStageTransition,
    Candidate,
    Company,
    Job,
    Recruiter,
)

__all__ = [
    "Base",
    "DatabaseService",
    "get_db",
    "get_db_service",
    "__version__",
    # Enums
    "ApplicationStage",
    "UserRole",
    # Models
    "Application",
    "ApplicationStageTransition",
    "Candidate",
    "Company",
    "Job",
    "Recruiter",
]
