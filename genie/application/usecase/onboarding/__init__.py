"""Onboarding use cases."""

from .create_classroom import CreateClassroomUseCase
from .director_onboarding import DirectorOnboardingUseCase

__all__ = ["CreateClassroomUseCase", "DirectorOnboardingUseCase"]
