from hostel.application.services.authentication_service import (
    AuthenticationService,
    RegistrationData,
    RegistrationResult,
)

__all__ = [
    "AuthenticationService",
    "RegistrationData",
    "RegistrationResult",
]
