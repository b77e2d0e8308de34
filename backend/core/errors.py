"""
Domain exceptions raised along the lookup pipeline
"""


class Dawn2DuskError(Exception):
    """Base class for lookup pipeline failures"""


class LocationRequiredError(Dawn2DuskError):
    """The request did not carry a usable location description"""

    def __init__(self, message: str = "User location is required"):
        super().__init__(message)


class InferenceError(Dawn2DuskError):
    """The inference backend failed or returned no text"""


class PersistenceError(Dawn2DuskError):
    """The log store could not append or read records"""
