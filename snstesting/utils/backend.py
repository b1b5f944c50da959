import logging

import wrapt

from botocore.exceptions import BotoCoreError
from botocore.exceptions import ClientError

from ..errors import BackendError

_logger = logging.getLogger(__name__)


@wrapt.decorator
def backend_call(wrapped, instance, args, kwargs):
    """Translates botocore failures raised by a remote call into BackendError, keeping the message as is"""
    try:
        return wrapped(*args, **kwargs)
    except (BotoCoreError, ClientError) as backend_exception:
        operation = wrapped.__name__.lstrip("_")
        _logger.debug("Remote call %s failed: %s", operation, backend_exception)
        raise BackendError(str(backend_exception), operation=operation) from backend_exception
