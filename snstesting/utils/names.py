import random
import string
import typing

QUEUE_NAME_PREFIX = "snstesting_"
QUEUE_NAME_SUFFIX_LENGTH = 20

_ALPHABET = string.ascii_letters + string.digits


def random_string(length: int, rng: typing.Optional[random.Random] = None) -> str:
    rng = rng or random.Random()
    return "".join(rng.choice(_ALPHABET) for _ in range(length))


def generate_queue_name(prefix: str = QUEUE_NAME_PREFIX, rng: typing.Optional[random.Random] = None) -> str:
    """
    Temporary queues share a recognizable prefix so leftovers can be found and removed in bulk,
    the random suffix keeps concurrent sessions on the same account apart.
    """
    return f"{prefix}{random_string(QUEUE_NAME_SUFFIX_LENGTH, rng)}"
