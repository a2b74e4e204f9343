from typing import Optional

import attrs
from uuid_utils import UUID


@attrs.frozen
class SeatOccupancy:
    """Who holds a seat. A seat without an occupancy is vacant."""

    member_id: int = attrs.field(validator=attrs.validators.instance_of(int))
    subscription_id: Optional[UUID] = None
