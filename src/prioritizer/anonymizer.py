from __future__ import annotations

import random
import string
from typing import Dict, Iterable, Optional

from prioritizer.models import Task

TOKEN_ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase
TOKEN_LENGTH = 4


def random_token(rng: random.Random, length: int = TOKEN_LENGTH) -> str:
    return "".join(rng.choice(TOKEN_ALPHABET) for _ in range(length))


def anonymize(tasks: Iterable[Task], rng: Optional[random.Random] = None) -> Dict[str, Task]:
    """Give every task a short random handle, unique within this batch.

    The handles stand in for page ids in the prompt and are mapped back once
    the model replies.
    """
    rng = rng or random.Random()
    tasks = list(tasks)
    if len(tasks) > len(TOKEN_ALPHABET) ** TOKEN_LENGTH:
        raise ValueError(f"cannot assign unique handles to {len(tasks)} tasks")

    mapping: Dict[str, Task] = {}
    for task in tasks:
        token = random_token(rng)
        while token in mapping:
            token = random_token(rng)
        mapping[token] = task
    return mapping
