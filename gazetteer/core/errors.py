from __future__ import annotations


class ValidationFailed(Exception):
    """Field level validation failure, rendered as 422 with a field -> messages map."""

    message = "The given data was invalid."

    def __init__(self, errors: dict[str, list[str]]):
        super().__init__(self.message)
        self.errors = errors

    @classmethod
    def field(cls, name: str, msg: str) -> "ValidationFailed":
        return cls({name: [msg]})


class NotFound(Exception):
    def __init__(self, entity: str, entity_id: object):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id

    @property
    def detail(self) -> str:
        return f"{self.entity} not found."


class ImportSourceError(Exception):
    """The bulk import source could not be opened or read."""
