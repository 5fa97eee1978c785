PROBLEM_WITH_MESSAGE_TYPE = "https://www.jhipster.tech/problem/problem-with-message"


class NotFoundError(Exception):
    """Raised when a requested resource does not exist."""

    def __init__(self, resource: str, resource_id: str) -> None:
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} '{resource_id}' not found")


class BadRequestAlertError(Exception):
    """Raised when client input is rejected for a given entity.

    The error key ends up in the ``error.{key}`` message token and in the
    failure alert headers, so clients can show a translated notification.
    """

    def __init__(self, message: str, entity_name: str, error_key: str) -> None:
        self.message = message
        self.entity_name = entity_name
        self.error_key = error_key
        super().__init__(message)

    def to_problem(self) -> dict[str, str | int]:
        return {
            "type": PROBLEM_WITH_MESSAGE_TYPE,
            "title": self.message,
            "status": 400,
            "message": f"error.{self.error_key}",
            "entityName": self.entity_name,
            "errorKey": self.error_key,
            "params": self.entity_name,
        }
