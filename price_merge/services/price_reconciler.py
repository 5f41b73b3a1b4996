# price_merge/services/price_reconciler.py

"""Merge newly imported prices into the set of already known prices.

Pooling rules, applied per ``(product_code, slot_number, department_id)``
group and per incoming price, in the order the prices were imported:

* If the group has no prices yet, or none of them share an instant with
  the incoming price, the incoming price is simply added.
* If an existing price overlaps the incoming one:
    - with the same amount, the incoming price is widened to absorb it;
    - with a different amount, the existing price is cut back to the part
      of its span the incoming price does not cover.
* Existing prices fully covered by the incoming one are dropped.
"""

import dataclasses
import logging
from collections.abc import Callable, Iterable
from datetime import datetime

from price_merge.models.price import GroupKey, Price
from price_merge.models.span import Span, SpanRelation, classify

logger = logging.getLogger("price_merge.reconciler")


class InvalidArgumentError(ValueError):
    """Raised when there is nothing to merge on either side."""


def _first_match(
    group: list[Price],
    predicate: Callable[[Span], bool],
) -> Price | None:
    """Return the first group member whose span satisfies ``predicate``.

    Within a consistent group at most one member can match each relation;
    if the group is already broken the earliest member wins.
    """
    for member in group:
        if predicate(member.span):
            return member
    return None


def _respan(price: Price, begin: datetime, end: datetime) -> Price:
    """Copy ``price`` with a new span, keeping its identity."""
    return dataclasses.replace(price, begin=begin, end=end)


def find_overlaps(prices: Iterable[Price]) -> list[tuple[Price, Price]]:
    """Return every same-group pair of prices whose spans share an instant.

    An empty list means the collection honours the one-active-price rule.
    Pairs are reported in input order.
    """
    by_group: dict[GroupKey, list[Price]] = {}
    overlaps: list[tuple[Price, Price]] = []

    for price in prices:
        seen = by_group.setdefault(price.group_key, [])
        for earlier in seen:
            if not earlier.span.is_disjoint_from(price.span):
                overlaps.append((earlier, price))
        seen.append(price)

    return overlaps


class PriceReconciler:
    """Reconcile existing and incoming prices into non-overlapping spans."""

    @staticmethod
    def merge(
        existing: Iterable[Price] | None,
        incoming: Iterable[Price] | None,
    ) -> list[Price]:
        """Merge ``incoming`` prices into ``existing`` ones.

        Each incoming price is resolved against the result of the previous
        ones, so the order of ``incoming`` is significant.

        Args:
            existing: Prices already known, or ``None``.
            incoming: Newly imported prices, or ``None``.

        Returns:
            The merged prices. Input objects are never mutated; every
            output record is either an input passed through or a new one.

        Raises:
            InvalidArgumentError: If both sides are ``None`` or empty.
        """
        existing_list = list(existing) if existing is not None else []
        incoming_list = list(incoming) if incoming is not None else []

        if not existing_list and not incoming_list:
            msg = "Missing valid data for merge"
            raise InvalidArgumentError(msg)

        if not existing_list:
            return incoming_list

        if not incoming_list:
            return existing_list

        result = list(existing_list)
        for incoming_price in incoming_list:
            key = incoming_price.group_key
            group = [p for p in result if p.group_key == key]
            result = [p for p in result if p.group_key != key]
            result.extend(
                PriceReconciler._resolve_group(key, group, incoming_price)
            )

        logger.info(
            "Merged %d incoming into %d existing prices, %d in result",
            len(incoming_list),
            len(existing_list),
            len(result),
        )
        return result

    @staticmethod
    def _resolve_group(
        key: GroupKey,
        group: list[Price],
        incoming: Price,
    ) -> list[Price]:
        """Return the new members of ``group`` once ``incoming`` joins it.

        Relations are always tested against the current span of the
        incoming price, which the equal-amount rules widen as they fire.
        """
        if not group:
            logger.debug("Group %s: no prices yet, adding %s", key, incoming)
            return [incoming]

        members: list[Price] = []
        current = incoming

        container = _first_match(group, current.span.is_inside_of)
        if container is not None:
            if current.amount == container.amount:
                current = _respan(current, container.begin, container.end)
            else:
                members.append(
                    container.with_span(container.begin, current.begin)
                )
                members.append(
                    container.with_span(current.end, container.end)
                )

        successor = _first_match(group, current.span.overlaps_right)
        if successor is not None:
            if current.amount == successor.amount:
                current = _respan(current, current.begin, successor.end)
            else:
                members.append(
                    successor.with_span(current.end, successor.end)
                )

        predecessor = _first_match(group, current.span.overlaps_left)
        if predecessor is not None:
            if current.amount == predecessor.amount:
                current = _respan(current, predecessor.begin, current.end)
            else:
                members.append(
                    predecessor.with_span(predecessor.begin, current.begin)
                )

        for member in group:
            relation = classify(current.span, member.span)
            if relation is SpanRelation.DISJOINT:
                members.append(member)
            else:
                logger.debug(
                    "Group %s: %s replaced (%s)",
                    key,
                    member,
                    relation.name.lower(),
                )

        members.append(current)
        logger.debug(
            "Group %s: %d -> %d prices", key, len(group), len(members)
        )
        return members
