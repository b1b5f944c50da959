import logging
import random
import typing

from opentelemetry.trace import Tracer
from opentelemetry.trace import TracerProvider

from . import provisioner
from . import receiver
from .api import SNSAPI
from .api import SQSAPI
from .config import SubscriberConfig
from .config import get_config
from .errors import SNSTestingError
from .provisioner import Session
from .utils.shared_types import ReceiveHookT
from .utils.span import get_tracer

_logger = logging.getLogger(__name__)


class Subscriber:
    """
    Checks what arrives at an SNS topic in an integration testing setting.

    It does it through a temporary SQS queue and an ad-hoc subscription that are easily cleaned up
    after the test. Use it as a context manager, or call ``cleanup`` yourself.
    """

    def __init__(
        self,
        sns: SNSAPI,
        sqs: SQSAPI,
        session: Session,
        config: typing.Optional[SubscriberConfig] = None,
        tracer: typing.Optional[Tracer] = None,
        receive_hook: ReceiveHookT = None,
    ):
        self.sns = sns
        self.sqs = sqs
        self.session = session
        self.config = config or get_config()
        self.tracer = tracer or get_tracer(self.config.instrument)
        self.receive_hook = receive_hook

    @classmethod
    def create(
        cls,
        sns: SNSAPI,
        sqs: SQSAPI,
        topic_name: str,
        config: typing.Optional[SubscriberConfig] = None,
        rng: typing.Optional[random.Random] = None,
        tracer_provider: typing.Optional[TracerProvider] = None,
        receive_hook: ReceiveHookT = None,
    ) -> "Subscriber":
        config = config or get_config()
        tracer = get_tracer(config.instrument, tracer_provider)
        session = provisioner.setup(sns, sqs, topic_name, config=config, rng=rng, tracer=tracer)
        return cls(sns, sqs, session, config=config, tracer=tracer, receive_hook=receive_hook)

    def receive(self) -> str:
        """Receives a single message published on the topic, empty string if none arrived in time"""
        return receiver.receive(self.sqs, self.session, config=self.config, hook=self.receive_hook, tracer=self.tracer)

    def cleanup(self) -> None:
        """Unsubscribes the temporary queue from the topic and removes it"""
        provisioner.teardown(self.sns, self.sqs, self.session, config=self.config, tracer=self.tracer)

    def __enter__(self) -> "Subscriber":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        try:
            self.cleanup()
        except SNSTestingError as cleanup_error:
            if exc_value is None:
                raise
            _logger.warning("Could not clean up %s", self.session.queue_name, exc_info=cleanup_error)
        return False


new_subscriber = Subscriber.create
