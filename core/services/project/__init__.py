from core.services.project.normalize import normalize_project, validate_project
from core.services.project.service import ProjectService

__all__ = ["ProjectService", "normalize_project", "validate_project"]
