# objectlog/errors.py
"""
Errors raised by the object model and its stores.

Every failure in this package is a raised exception; nothing exits the
process. Callers that want to treat all of them alike can catch
ObjectLogError.
"""


class ObjectLogError(Exception):
    """Base class for object model errors."""


class NotFoundError(ObjectLogError):
    """The target of get/update/delete is not in the store."""

    def __init__(self, object_id: str):
        super().__init__(f"object not found: {object_id}")
        self.object_id = object_id


class AlreadyExistsError(ObjectLogError):
    """create() was called with an id that is already stored."""

    def __init__(self, object_id: str):
        super().__init__(f"object already exists: {object_id}")
        self.object_id = object_id


class DecodeError(ObjectLogError, ValueError):
    """An object's fields cannot be read as the expected typed view."""
