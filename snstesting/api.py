"""
The part of the boto3 SNS and SQS clients snstesting relies on.

Any object providing these methods (a real ``boto3`` client, a botocore ``Stubber``-backed client or a mock)
can be handed to the provisioner and receiver.
"""
import typing


class SNSAPI(typing.Protocol):
    def list_topics(self, **kwargs) -> typing.Dict[str, typing.Any]:
        ...

    def subscribe(self, **kwargs) -> typing.Dict[str, typing.Any]:
        ...

    def unsubscribe(self, **kwargs) -> typing.Dict[str, typing.Any]:
        ...


class SQSAPI(typing.Protocol):
    def create_queue(self, **kwargs) -> typing.Dict[str, typing.Any]:
        ...

    def delete_queue(self, **kwargs) -> typing.Dict[str, typing.Any]:
        ...

    def get_queue_attributes(self, **kwargs) -> typing.Dict[str, typing.Any]:
        ...

    def set_queue_attributes(self, **kwargs) -> typing.Dict[str, typing.Any]:
        ...

    def receive_message(self, **kwargs) -> typing.Dict[str, typing.Any]:
        ...
