"""
Service-level errors, translated to HTTP status codes by the API routers
"""


class ExamServiceError(Exception):
    """Base class for errors raised by the exam services"""


class ValidationError(ExamServiceError, ValueError):
    """Request content violates a domain rule; nothing was changed"""


class NotFoundError(ExamServiceError, LookupError):
    """A referenced record does not exist"""


class SessionStateError(ExamServiceError):
    """Operation not allowed in the session's current state"""
