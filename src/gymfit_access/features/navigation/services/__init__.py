"""Navigation services."""

from .navigation_service import NavigationService, evaluate_requirement

__all__ = ["NavigationService", "evaluate_requirement"]
