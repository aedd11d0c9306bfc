"""User-facing notification model."""
from dataclasses import dataclass, asdict
from typing import Dict


@dataclass
class Notification:
    """Transient message shown to the user after an action."""
    title: str
    description: str
    variant: str = "default"  # "default" or "destructive"

    @property
    def is_error(self) -> bool:
        return self.variant == "destructive"

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)
