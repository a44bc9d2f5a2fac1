"""Domain errors raised by the entry store and service.

Each error carries the HTTP status it maps to; `carnet.main` registers a
handler that turns them into `{"detail": message}` responses.
"""


class EntryError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(EntryError):
    status_code = 401
    default_message = "Not authenticated"


class InvalidRequest(EntryError):
    status_code = 400
    default_message = "Missing dates"


class DuplicateWeek(EntryError):
    status_code = 400
    default_message = "An entry already exists for this week"


class Forbidden(EntryError):
    status_code = 403
    default_message = "Not allowed"


class NotFound(EntryError):
    status_code = 404
    default_message = "Entry not found"
