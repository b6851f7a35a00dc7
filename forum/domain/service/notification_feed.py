"""Notification feed state.

Holds one user's notifications newest first together with an unread
counter, fed by batch loads and by live pushes. Pushes are de-duplicated
by ID; pushes that arrive before the first load are buffered and merged
into it. Notifications marked read here stay read when a batch fetched
before the mark lands later.
"""

from collections.abc import Iterable

from forum.domain.model.notification import Notification
from forum.domain.value import NotificationId


def _newest_first(records: Iterable[Notification]) -> list[Notification]:
    return sorted(records, key=lambda n: (n.created_at, str(n.id)), reverse=True)


class NotificationFeed:
    """In-memory notification view for a single user.

    Not thread-safe; meant to be driven from one event loop.
    """

    def __init__(self) -> None:
        self._records: list[Notification] = []
        self._index: dict[NotificationId, int] = {}
        self._pending: dict[NotificationId, Notification] = {}
        self._read: set[NotificationId] = set()
        self._unread = 0
        self._loaded = False

    @property
    def notifications(self) -> tuple[Notification, ...]:
        """Snapshot of held notifications, newest first."""
        return tuple(self._records)

    @property
    def unread_count(self) -> int:
        return self._unread

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def load(self, records: Iterable[Notification]) -> None:
        """Replace the held notifications with a batch fetch.

        Duplicate IDs in the batch keep the first occurrence. Pushes
        buffered before the first load are merged in; when both copies
        exist a read flag on either side wins.
        """
        merged: dict[NotificationId, Notification] = {}
        for record in records:
            merged.setdefault(record.id, record)

        for record in self._pending.values():
            held = merged.get(record.id)
            if held is None:
                merged[record.id] = record
            elif record.read and not held.read:
                merged[record.id] = held.model_copy(update={"read": True})
        self._pending.clear()

        self._replace(_newest_first(merged.values()))
        self._loaded = True

    def mark_read(self, notification_id: NotificationId) -> None:
        """Mark one notification as read. Idempotent."""
        self._read.add(notification_id)
        position = self._index.get(notification_id)
        if position is None:
            pending = self._pending.get(notification_id)
            if pending is not None and not pending.read:
                self._pending[notification_id] = pending.model_copy(
                    update={"read": True}
                )
            return

        record = self._records[position]
        if record.read:
            return
        self._records[position] = record.model_copy(update={"read": True})
        self._unread = max(0, self._unread - 1)

    def mark_all_read(self) -> None:
        """Mark every held (and buffered) notification as read."""
        self._read.update(self._index)
        self._read.update(self._pending)
        self._records = [
            record if record.read else record.model_copy(update={"read": True})
            for record in self._records
        ]
        self._pending = {
            key: record if record.read else record.model_copy(update={"read": True})
            for key, record in self._pending.items()
        }
        self._unread = 0

    def receive_push(self, record: Notification) -> bool:
        """Merge a live notification.

        Returns:
            True if the record was new, False if it was a duplicate
        """
        if not self._loaded:
            if record.id in self._pending:
                return False
            self._pending[record.id] = self._apply_read(record)
            return True

        if record.id in self._index:
            return False

        self._replace([record, *self._records])
        return True

    def _apply_read(self, record: Notification) -> Notification:
        if record.read or record.id not in self._read:
            return record
        return record.model_copy(update={"read": True})

    def _replace(self, records: list[Notification]) -> None:
        records = [self._apply_read(record) for record in records]
        self._records = records
        self._index = {record.id: position for position, record in enumerate(records)}
        self._unread = sum(1 for record in records if not record.read)
