"""
Domain exceptions
"""


class ValidationError(ValueError):
    """Raised when a domain object is built from invalid numeric input"""

    def __init__(self, field: str, value, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"{field}={value!r}: {reason}")
