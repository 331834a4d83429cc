"""Authentication use cases."""

from .get_current_session import GetCurrentSessionUseCase
from .refresh_session import RefreshSessionUseCase
from .sign_up import SignUpUseCase

__all__ = ["GetCurrentSessionUseCase", "RefreshSessionUseCase", "SignUpUseCase"]
