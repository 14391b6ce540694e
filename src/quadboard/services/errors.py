# src/quadboard/services/errors.py
"""Domain errors raised by the service layer.

Routers translate these to HTTP responses; everything else (including
SQLAlchemy errors from the store) propagates untouched.
"""


class QuadboardError(RuntimeError):
    """Base exception for rule-engine failures."""


class NotFoundError(QuadboardError):
    """A referenced document does not exist."""


class PostNotFoundError(NotFoundError):
    """Raised when a post id does not resolve."""


class CommentNotFoundError(NotFoundError):
    """Raised when a comment id does not resolve."""


class ContentNotFoundError(NotFoundError):
    """Raised when reported content no longer exists."""


class GroupNotFoundError(NotFoundError):
    """Raised when a group id does not resolve."""


class UserNotFoundError(NotFoundError):
    """Raised when a user document is missing."""


class NotificationNotFoundError(NotFoundError):
    """Raised when a notification id does not resolve for its recipient."""


class UnauthorizedError(QuadboardError):
    """The acting user is not allowed to perform the operation."""


class NotGroupAdminError(UnauthorizedError):
    """Only the group admin may manage requests or delete the group."""


class NotContentAuthorError(UnauthorizedError):
    """Only the author may edit, pin or delete a post."""


class GroupAccessDeniedError(UnauthorizedError):
    """The user cannot read or write a private group's messages."""


class InvalidOperationError(QuadboardError):
    """The operation does not apply to the document's current state."""


class GroupIsPrivateError(InvalidOperationError):
    """Direct join attempted on a private group."""


class GroupNotPrivateError(InvalidOperationError):
    """Join request attempted on a public group."""


class AdminCannotLeaveError(InvalidOperationError):
    """The admin must delete the group instead of leaving it."""


class NotGroupMemberError(InvalidOperationError):
    """Leave attempted by a user who is not a member."""


class ReportedAuthorMismatchError(InvalidOperationError):
    """A report names someone other than the content's author."""


class OracleUnavailableError(QuadboardError):
    """The moderation oracle could not produce scores."""
