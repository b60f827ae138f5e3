import random
import string
import threading
import time

ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits


class IdentifierGenerator:
    """Random fixed-length identifiers drawn from ``ALPHABET``.

    One instance is shared by all requests of an app, so sampling is
    serialized. No uniqueness check is made against identifiers that
    already exist on disk; at the default length collisions are unlikely
    and are accepted.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random(time.time_ns())
        self._lock = threading.Lock()

    def generate(self, length: int) -> str:
        if length < 0:
            raise ValueError("length must be >= 0")
        with self._lock:
            return "".join(self._rng.choice(ALPHABET) for _ in range(length))
