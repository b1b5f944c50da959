import typing


class SNSTestingError(Exception):
    """Base class for every error raised by snstesting"""


class BackendError(SNSTestingError):
    """A call to SNS or SQS failed. The original botocore error is kept as ``__cause__``."""

    def __init__(self, message: str, operation: typing.Optional[str] = None):
        super().__init__(message)
        self.operation = operation


class TopicNotFound(SNSTestingError):
    def __init__(self, topic_name: str):
        super().__init__(f"topic {topic_name} not found")
        self.topic_name = topic_name


class AggregateError(SNSTestingError):
    """
    Several independently attempted operations failed.

    Every constituent error is kept in ``errors`` (in the order they were attempted). The text
    representation joins their messages with a comma, optionally after a ``prefix``.
    """

    def __init__(self, errors: typing.Sequence[BaseException], prefix: typing.Optional[str] = None):
        self.errors = tuple(errors)
        self.prefix = prefix
        joined = ",".join(str(error) for error in self.errors)
        super().__init__(f"{prefix}: {joined}" if prefix else joined)


def combine_errors(
    *errors: typing.Optional[BaseException], prefix: typing.Optional[str] = None
) -> typing.Optional[AggregateError]:
    """Helper function to merge errors into one, ``None`` when there is nothing to merge"""
    present = [error for error in errors if error is not None]
    if not present:
        return None
    return AggregateError(present, prefix=prefix)
