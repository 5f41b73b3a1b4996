# price_merge/models/price.py

"""Price record model: one time-bounded pricing fact.

Each item sold has a price. There may be several prices for a product;
each price has its own slot number, department, validity span and
amount. Slot 1 is the regular sale price; slots 2+ are used for
conditional or discount prices. Only one price per
``(product_code, slot_number, department_id)`` group may be active at any
instant.
"""

from dataclasses import dataclass, field
from datetime import datetime

from price_merge.config.settings import Settings
from price_merge.models.span import Span

GroupKey = tuple[str, int, int]

TimestampLike = datetime | str


def parse_timestamp(raw: str) -> datetime:
    """Parse a ``dd.mm.yyyy hh:mm:ss`` timestamp (see Settings.TIMESTAMP_FORMAT)."""
    return datetime.strptime(raw.strip(), Settings.TIMESTAMP_FORMAT)


def _as_datetime(value: TimestampLike) -> datetime:
    if isinstance(value, str):
        return parse_timestamp(value)
    return value


@dataclass(frozen=True)
class Price:
    """A price for one product, slot and department over a validity span.

    ``amount`` is in minor currency units (kopecks, cents) so equality is
    exact. ``id`` is the persistent identity assigned by whatever store
    holds the record; it takes no part in equality, hashing or grouping.
    """

    product_code: str
    slot_number: int
    department_id: int
    begin: datetime
    end: datetime
    amount: int
    id: int | None = field(default=None, compare=False)

    @property
    def group_key(self) -> GroupKey:
        """Key of the records competing with this one for the same instant."""
        return (self.product_code, self.slot_number, self.department_id)

    @property
    def span(self) -> Span:
        """Validity span built from the current ``begin``/``end``."""
        return Span(self.begin, self.end)

    def with_span(self, begin: datetime, end: datetime) -> "Price":
        """Derive a new, not yet persisted price with a different span.

        Group key and amount are carried over; ``id`` is not.
        """
        return Price(
            product_code=self.product_code,
            slot_number=self.slot_number,
            department_id=self.department_id,
            begin=begin,
            end=end,
            amount=self.amount,
        )

    @classmethod
    def of(
        cls,
        product_code: str,
        slot_number: int,
        department_id: int,
        begin: TimestampLike,
        end: TimestampLike,
        amount: int,
        id: int | None = None,
    ) -> "Price":
        """Build a price from raw fields.

        ``begin`` and ``end`` may be datetimes or strings in
        ``Settings.TIMESTAMP_FORMAT``; a malformed string raises
        ``ValueError``.
        """
        return cls(
            product_code=product_code,
            slot_number=slot_number,
            department_id=department_id,
            begin=_as_datetime(begin),
            end=_as_datetime(end),
            amount=amount,
            id=id,
        )
