from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

Number = Union[int, float]


@dataclass(frozen=True)
class Spa:
    """One catalog entry (a spa and the treatments it offers).

    String fields use ``''`` for "absent"; ``budget`` and ``rating`` use ``None``.
    """

    id: int
    title: str = ''
    email: str = ''
    phone: str = ''
    address: str = ''
    website: str = ''
    location: str = ''
    budget: Optional[Number] = None
    rating: Optional[float] = None
    opening_hour: str = ''
    closing_hour: str = ''
    treatments: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON shape served by the API"""
        return {
            'id': self.id,
            'title': self.title,
            'email': self.email,
            'phone': self.phone,
            'address': self.address,
            'website': self.website,
            'location': self.location,
            'budget': self.budget,
            'rating': self.rating,
            'opening_hour': self.opening_hour,
            'closing_hour': self.closing_hour,
            'treatments': list(self.treatments),
        }
