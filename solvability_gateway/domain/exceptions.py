"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidScoreInputError(DomainException):
    """Applicant profile is internally inconsistent and cannot be scored"""

    pass


class AssessmentNotFoundError(DomainException):
    """No stored assessment matches the requested identifier"""

    pass
