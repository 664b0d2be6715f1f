"""fewshot exceptions."""


class FewShotError(Exception):
    """Base class for errors raised inside the retrieval engine."""


class InvalidExampleError(FewShotError):
    """Raised when a persisted record cannot be decoded into an Example."""

    def __init__(self, reason: str, record_id: object = None) -> None:
        self.reason = reason
        self.record_id = record_id
        label = f" {record_id!r}" if record_id is not None else ""
        super().__init__(f"Invalid example{label}: {reason}")


class CorpusWriteError(FewShotError):
    """Raised when the corpus cannot be written back to its store."""
