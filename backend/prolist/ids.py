import uuid
from collections.abc import Callable

IdFactory = Callable[[], str]


def new_id() -> str:
    """Globally unique id for document records and versions."""
    return str(uuid.uuid4())
