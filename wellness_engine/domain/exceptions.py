"""Domain-specific exceptions"""

from typing import List


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ReferenceDataError(DomainException):
    """Risk table or benchmark file is missing or malformed"""

    pass


class InvalidWellnessInputError(DomainException):
    """Wellness check input failed validation"""

    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors) or "Invalid wellness input")
        self.errors = list(errors)
