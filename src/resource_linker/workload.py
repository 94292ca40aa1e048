"""Per-class completion ledger used while mappings are being built."""

from typing import Dict, List

from .models import ClassName


class ClassWorkLoad:
    """
    Tracks, for one build invocation, which classes already have their self
    mapping and which relational targets are still waiting for one.
    """

    def __init__(self):
        self._completed: Dict[ClassName, None] = {}
        self._pending: Dict[ClassName, None] = {}
        self._too_many_self: Dict[ClassName, None] = {}

    def is_completed(self, class_name: ClassName) -> bool:
        return class_name in self._completed

    def complete(self, class_name: ClassName) -> None:
        self._completed[class_name] = None
        self._pending.pop(class_name, None)

    def add_pending_if_none(self, class_name: ClassName) -> None:
        if class_name not in self._completed:
            self._pending.setdefault(class_name, None)

    def flag_too_many_self(self, class_name: ClassName) -> None:
        self._too_many_self.setdefault(class_name, None)

    def is_flagged(self, class_name: ClassName) -> bool:
        return class_name in self._too_many_self

    def pending(self) -> List[ClassName]:
        """Relational targets not yet completed, in first-seen order."""
        return list(self._pending)

    def completed(self) -> List[ClassName]:
        return list(self._completed)

    def flagged(self) -> List[ClassName]:
        return list(self._too_many_self)
