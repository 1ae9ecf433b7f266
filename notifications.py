# User-facing notifications (the console counterpart of a toast message).

from abc import ABC, abstractmethod
from enum import Enum


class Variant(Enum):
    ERROR = 'error'
    SUCCESS = 'success'


class Notifier(ABC):
    @abstractmethod
    def notify(self, title: str, message: str, variant: Variant) -> None:
        """Shows a titled message to the user. Nothing is returned."""
        pass


class ConsoleNotifier(Notifier):
    """Prints notifications to the terminal."""
    MARKERS = {Variant.ERROR: '!', Variant.SUCCESS: '>'}

    def notify(self, title: str, message: str, variant: Variant) -> None:
        print(f"   {self.MARKERS[variant]} [{title}] {message}")
