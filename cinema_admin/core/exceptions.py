import traceback


class AppError(Exception):
    def __init__(self, message: str, status_code: int = 400, stack_trace: bool = False):
        self.message = message
        self.status_code = status_code
        self.stack_trace = traceback.format_exc() if stack_trace else None
        super().__init__(self.message)


class ValidationError(AppError):
    def __init__(self, message: str = "Invalid request"):
        super().__init__(message, status_code=400)


class NotFoundError(AppError):
    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class ConflictError(AppError):
    def __init__(self, message: str = "Resource conflict"):
        super().__init__(message, status_code=409)


class SchedulingConflictError(ConflictError):
    def __init__(self, screening_id: int):
        self.screening_id = screening_id
        super().__init__(f"Screen is already booked for this time slot (screening {screening_id})")


class UnauthenticatedError(AppError):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, status_code=401)


class ForbiddenError(AppError):
    def __init__(self, message: str = "Access denied"):
        super().__init__(message, status_code=403)


class StoreUnavailableError(AppError):
    def __init__(self, message: str = "Service temporarily unavailable"):
        super().__init__(message, status_code=500, stack_trace=True)


# Session errors stay inside the auth layer and are translated to
# UnauthenticatedError before they reach a client.
class SessionError(Exception):
    message = "Session error"

    def __init__(self, message: str = message):
        self.message = message
        super().__init__(self.message)

    def __str__(self):
        return self.message


class SessionNotFoundError(SessionError):
    message = "Session not found"

    def __init__(self, message: str = message):
        super().__init__(message)


class SessionExpiredError(SessionError):
    message = "Session expired"

    def __init__(self, message: str = message):
        super().__init__(message)


class SessionStoreUnavailableError(SessionError):
    message = "Session store unavailable"

    def __init__(self, message: str = message):
        super().__init__(message)
