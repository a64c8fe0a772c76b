# exceptions.py

class SessionNotFoundError(Exception):
    """Raised when a game session id is not known to the session store."""
    def __init__(self, message="Session not found"):
        self.message = message
        super().__init__(self.message)


class RoundStateError(Exception):
    """Raised when a round operation is not allowed in the current round state."""
    def __init__(self, message="Operation not allowed in the current round"):
        self.message = message
        super().__init__(self.message)


class CatalogEmptyError(Exception):
    """Raised when the people catalog has nobody to serve."""
    def __init__(self, message="People catalog is empty"):
        self.message = message
        super().__init__(self.message)


class RateLimitExceeded(Exception):
    """Raised when an API rate limit is exceeded."""
    def __init__(self, message="API rate limit exceeded"):
        self.message = message
        super().__init__(self.message)
