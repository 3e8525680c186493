class TallyError(Exception):
    """Base error rendered to clients as {"error": message}"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgument(TallyError):
    """Malformed request input; nothing was written"""
    status_code = 400


class StoreUnavailable(TallyError):
    """The score store failed or could not be reached.

    Writes already applied by the same increment are not rolled back.
    """
    status_code = 500

    @classmethod
    def from_error(cls, error: Exception) -> "StoreUnavailable":
        return cls(str(error) or "fail")
