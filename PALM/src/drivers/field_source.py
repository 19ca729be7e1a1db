import logging
import math
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

FieldRequest = Tuple[str, float]


class FieldSource(ABC):
    """Collects numeric values from the user. Returning None means the form was cancelled."""

    @abstractmethod
    def request(
        self, fields: Sequence[FieldRequest], title: str = "", decimals: int = 3
    ) -> Optional[List[float]]: pass


def parse_answer(text: str, default: float) -> float:
    text = text.strip()
    if not text:
        return default
    try:
        return float(text)
    except ValueError:
        return math.nan


class ConsoleFieldSource(FieldSource):
    """Prompts on stdin. An empty answer keeps the default, 'q' or EOF cancels."""

    def __init__(self, input_func: Callable[[str], str] = input, output_func: Callable[[str], None] = print):
        self._input = input_func
        self._output = output_func

    def request(self, fields, title="", decimals=3):
        if title:
            self._output(f"--- {title} ---")
        values = []
        for label, default in fields:
            try:
                answer = self._input(f"{label} [{default:.{decimals}f}]: ")
            except EOFError:
                logger.info("Input closed, form cancelled")
                return None
            if answer.strip().lower() == "q":
                return None
            value = parse_answer(answer, default)
            if math.isnan(value) and not math.isnan(default):
                logger.warning("Could not read a number for %s from %r", label, answer)
            values.append(value)
        return values


class ScriptedFieldSource(FieldSource):
    """Answers forms without a user: preset values, the defaults, or cancellation."""

    def __init__(self, values: Optional[Sequence[float]] = None, cancel: bool = False):
        self.values = None if values is None else [float(v) for v in values]
        self.cancel = cancel
        self.requests: List[List[FieldRequest]] = []

    def request(self, fields, title="", decimals=3):
        self.requests.append(list(fields))
        if self.cancel:
            return None
        if self.values is None:
            return [float(default) for _, default in fields]
        return list(self.values)
