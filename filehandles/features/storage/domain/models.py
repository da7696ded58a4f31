from dataclasses import dataclass
from datetime import datetime

@dataclass(frozen=True)
class LocationAttributes:
    """
    Timestamps queried live from the host filesystem.
    """
    creation_date: datetime
    modification_date: datetime
