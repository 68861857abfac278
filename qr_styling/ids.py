# -*- coding: utf-8 -*-
"""
Identifier Source

Suffixes for gradient and clip-path ids, so that documents rendered
independently can be concatenated without id clashes. A source is passed
explicitly through the renderer and the border plugin; share one source
across renders, or rely on the random namespace of a default-constructed
one.
"""

import itertools
import threading
import uuid
from typing import Optional


class IdSource:
    """
    Thread-safe, monotonically increasing id generator.

    Example:
        >>> ids = IdSource(namespace="")
        >>> ids.next_id(), ids.next_id()
        ('0', '1')
        >>> IdSource(namespace="qr").next_id()
        'qr-0'
    """

    def __init__(self, namespace: Optional[str] = None, start: int = 0):
        self.namespace = uuid.uuid4().hex[:8] if namespace is None else namespace
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            value = next(self._counter)
        return f"{self.namespace}-{value}" if self.namespace else str(value)
