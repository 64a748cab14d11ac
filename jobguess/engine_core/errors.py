"""
Engine errors.

Only submissions are validated. Unknown job or description ids are
filtered out silently by the state layer and never reach here.
"""


class ValidationError(ValueError):
    """A description submission was rejected."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


def validate_submission(text: str, contributor: str) -> None:
    """
    Check a new description before it reaches the store.

    Raises ValidationError if text or contributor is empty or
    whitespace-only.
    """
    if not text or not text.strip():
        raise ValidationError("text", "Description text must not be empty")
    if not contributor or not contributor.strip():
        raise ValidationError("contributor", "Contributor name must not be empty")
