"""Read contract the insight engine needs from storage"""

from abc import ABC, abstractmethod
from typing import List

from .models import ApplicationRecord


class ApplicationStore(ABC):
    """Anything that can materialize the full set of applications"""

    @abstractmethod
    def fetch_all(self) -> List[ApplicationRecord]:
        """
        Return every application record.

        Raises:
            StorageError: if the store is unreachable or the query fails
        """
        pass
