import typing

import environ

PREFIX = "SNSTESTING"


@environ.config(prefix=PREFIX)
class SubscriberConfig:
    """Configuration of the temporary subscription, read from SNSTESTING_* environment variables."""

    queue_prefix: str = environ.var(default="snstesting_")
    # how long a received message stays hidden from other polls
    visibility_timeout: int = environ.var(default=3600, converter=int)
    wait_time_seconds: int = environ.var(default=3, converter=int)
    instrument: bool = environ.bool_var(default=True)

    @environ.config
    class Aws:
        """How the SNS and SQS clients reach AWS, everything else is left to the boto3 credential chain."""

        region: typing.Optional[str] = environ.var(default=None)
        endpoint_url: typing.Optional[str] = environ.var(default=None)
        profile: typing.Optional[str] = environ.var(default=None)
        connect_timeout: int = environ.var(default=5, converter=int)
        read_timeout: int = environ.var(default=30, converter=int)

    aws: Aws = environ.group(Aws)


def get_config(env: typing.Optional[typing.Mapping[str, str]] = None) -> SubscriberConfig:
    if env is None:
        return SubscriberConfig.from_environ()  # type: ignore
    return SubscriberConfig.from_environ(environ=env)  # type: ignore
