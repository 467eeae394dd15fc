import logging
from datetime import date
from typing import Iterable, Iterator, List, Optional, Sequence

from .context import FilterState
from .models import DEFAULT_CATEGORY, Load, as_calendar_date

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "category",
    "origin",
    "destination",
    "weight",
    "notes",
    "date",
    "truck_number",
    "load_number",
)


class LoadNotFoundError(LookupError):
    """Raised when a position or id does not resolve to a stored load."""

    def __init__(self, message: str, index: Optional[int] = None, load_id: Optional[str] = None):
        super().__init__(message)
        self.index = index
        self.load_id = load_id


class LoadStore:
    """
    Ordered in-memory collection of loads for one session.

    The store is the only write path: the form appends, the edit view
    updates, the list deletes. Insertion order is list order.
    """

    def __init__(self, loads: Optional[Iterable[Load]] = None):
        self._loads: List[Load] = list(loads or [])

    def __len__(self) -> int:
        return len(self._loads)

    def __iter__(self) -> Iterator[Load]:
        return iter(list(self._loads))

    @property
    def loads(self) -> tuple:
        return tuple(self._loads)

    def next_load_number(self, for_date: date) -> int:
        """1 + the highest load number already used on that calendar day, or 1."""
        day = as_calendar_date(for_date)
        numbers = [load.load_number for load in self._loads if load.date == day]
        return max(numbers, default=0) + 1

    def new_load(
        self,
        date: date,
        truck_number: str = "",
        category=DEFAULT_CATEGORY,
        origin: str = "",
        destination: str = "",
        weight: float = 0,
        notes: str = "",
        load_number: Optional[int] = None,
    ) -> Load:
        """Build (but do not store) a load numbered for its date."""
        return Load(
            category=category,
            origin=origin,
            destination=destination,
            weight=weight,
            notes=notes,
            date=date,
            truck_number=truck_number,
            load_number=load_number if load_number is not None else self.next_load_number(date),
        )

    def append(self, load: Load) -> Load:
        self._loads.append(load)
        logger.debug("Appended load %s (#%s on %s)", load.id, load.load_number, load.date)
        return load

    def get(self, load_id: str) -> Load:
        for load in self._loads:
            if load.id == load_id:
                return load
        raise LoadNotFoundError(f"No load with id {load_id!r}", load_id=load_id)

    def update(self, load_id: str, **changes) -> Load:
        """
        Edit a stored load in place. Load numbers are not re-checked for
        uniqueness; the detail view may set any positive number.
        """
        unknown = sorted(set(changes) - set(EDITABLE_FIELDS))
        if unknown:
            raise ValueError(f"Cannot edit field(s): {', '.join(unknown)}")
        load = self.get(load_id)
        # Validate against a scratch copy first so a bad value leaves the load untouched.
        values = {name: getattr(load, name) for name in EDITABLE_FIELDS}
        values.update(changes)
        checked = Load(id=load.id, **values)
        for name in changes:
            setattr(load, name, getattr(checked, name))
        logger.debug("Updated load %s: %s", load_id, ", ".join(sorted(changes)))
        return load

    def delete_at(self, indices: Iterable[int], view: Optional[Sequence[Load]] = None) -> List[Load]:
        """
        Remove loads by position in ``view`` (the filtered list the user sees),
        or in the full collection when no view is given. All positions are
        checked before anything is removed.
        """
        shown = list(self._loads) if view is None else list(view)
        positions = sorted(set(indices))
        for index in positions:
            if index < 0 or index >= len(shown):
                raise LoadNotFoundError(
                    f"Index {index} is out of range for a view of {len(shown)} load(s)",
                    index=index,
                )
        targets = [shown[i] for i in positions]
        stored_ids = {id(load) for load in self._loads}
        stale = [load for load in targets if id(load) not in stored_ids]
        if stale:
            raise LoadNotFoundError(f"Load {stale[0].id} is no longer stored", load_id=stale[0].id)
        target_ids = {id(load) for load in targets}
        self._loads = [load for load in self._loads if id(load) not in target_ids]
        logger.info("Deleted %d load(s)", len(targets))
        return targets

    def filter_by_date_range(self, start: date, end: date, enabled: bool = True) -> List[Load]:
        """Loads dated within [start, end], in stored order."""
        if not enabled:
            return list(self._loads)
        first = as_calendar_date(start)
        last = as_calendar_date(end)
        return [load for load in self._loads if first <= load.date <= last]

    def filtered(self, filters: FilterState) -> List[Load]:
        if not filters.is_active():
            return list(self._loads)
        return self.filter_by_date_range(filters.start, filters.end)
