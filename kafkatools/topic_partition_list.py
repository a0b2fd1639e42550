"""A list of topics and partitions with optional offsets."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterable, Iterator, Mapping

PARTITION_UNASSIGNED = -1

_RAW_BEGINNING = -2
_RAW_END = -1
_RAW_STORED = -1000
_RAW_INVALID = -1001


class KafkaError(Exception):
    """An error reported while manipulating topic partitions or offsets."""


class OffsetKind(Enum):
    """The kind of an offset: a logical position or a concrete number."""

    BEGINNING = "beginning"
    END = "end"
    STORED = "stored"
    INVALID = "invalid"
    OFFSET = "offset"


_KIND_TO_RAW = {
    OffsetKind.BEGINNING: _RAW_BEGINNING,
    OffsetKind.END: _RAW_END,
    OffsetKind.STORED: _RAW_STORED,
    OffsetKind.INVALID: _RAW_INVALID,
}
_RAW_TO_KIND = {raw: kind for kind, raw in _KIND_TO_RAW.items()}


@dataclass(frozen=True)
class Offset:
    """A partition offset.

    Use ``Offset.BEGINNING``, ``Offset.END``, ``Offset.STORED`` and
    ``Offset.INVALID`` for logical offsets and ``Offset.at(n)`` for a
    specific one.
    """

    kind: OffsetKind
    value: int | None = None

    BEGINNING: ClassVar[Offset]
    END: ClassVar[Offset]
    STORED: ClassVar[Offset]
    INVALID: ClassVar[Offset]

    def __post_init__(self) -> None:
        if self.kind is OffsetKind.OFFSET:
            if isinstance(self.value, bool) or not isinstance(self.value, int):
                raise TypeError(f"offset value must be an integer, got {self.value!r}")
        elif self.value is not None:
            raise ValueError(f"{self.kind.name} offset takes no value")

    @classmethod
    def at(cls, value: int) -> Offset:
        """A specific offset to consume from."""
        return cls(OffsetKind.OFFSET, value)

    @classmethod
    def from_raw(cls, raw_offset: int) -> Offset:
        """Convert the integer wire representation into an offset."""
        kind = _RAW_TO_KIND.get(raw_offset)
        if kind is None:
            return cls.at(raw_offset)
        return cls(kind)

    def to_raw(self) -> int:
        """Convert the offset into its integer wire representation."""
        if self.kind is OffsetKind.OFFSET:
            assert self.value is not None
            return self.value
        return _KIND_TO_RAW[self.kind]

    def __repr__(self) -> str:
        if self.kind is OffsetKind.OFFSET:
            return f"Offset.at({self.value})"
        return f"Offset.{self.kind.name}"


Offset.BEGINNING = Offset(OffsetKind.BEGINNING)
Offset.END = Offset(OffsetKind.END)
Offset.STORED = Offset(OffsetKind.STORED)
Offset.INVALID = Offset(OffsetKind.INVALID)


@dataclass
class TopicPartitionListElem:
    """One entry of a topic partition list; its offset may be changed in place."""

    topic: str
    partition: int
    offset: Offset = Offset.INVALID
    error: str | None = field(default=None, compare=False)

    def check_error(self) -> None:
        """Raise KafkaError if an error is attached to this entry."""
        if self.error is not None:
            raise KafkaError(f"offset fetch error: {self.error}")


def _check_topic(topic: str) -> str:
    if not isinstance(topic, str):
        raise TypeError(f"topic name must be a string, got {topic!r}")
    if "\x00" in topic:
        raise ValueError(f"topic name contains a NUL character: {topic!r}")
    return topic


class TopicPartitionList:
    """An ordered list of topic partitions with their offsets."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, capacity: int = 5) -> None:
        if capacity < 0:
            raise ValueError(f"capacity must not be negative: {capacity}")
        self._capacity = capacity
        self._elems: list[TopicPartitionListElem] = []

    @classmethod
    def from_topic_map(
        cls, topic_map: Mapping[tuple[str, int], Offset]
    ) -> TopicPartitionList:
        """Build a list from a mapping of (topic, partition) to offset."""
        tpl = cls(len(topic_map))
        for (topic, partition), offset in topic_map.items():
            tpl.add_partition_offset(topic, partition, offset)
        return tpl

    @property
    def capacity(self) -> int:
        """Number of entries the list can hold before growing."""
        return self._capacity

    def __len__(self) -> int:
        return len(self._elems)

    def __iter__(self) -> Iterator[TopicPartitionListElem]:
        return iter(self._elems)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TopicPartitionList):
            return NotImplemented
        if len(self) != len(other):
            return False
        for elem in self._elems:
            other_elem = other.find_partition(elem.topic, elem.partition)
            if other_elem is None or other_elem != elem:
                return False
        return True

    def __repr__(self) -> str:
        body = "".join(
            f"({elem.topic}, {elem.partition}): {elem.offset!r}, " for elem in self._elems
        )
        return f"TPL {{{body}}}"

    def copy(self) -> TopicPartitionList:
        """Return an independent copy of the list."""
        new = TopicPartitionList(self._capacity)
        new._elems = [
            TopicPartitionListElem(e.topic, e.partition, e.offset, e.error)
            for e in self._elems
        ]
        return new

    def _append(self, elem: TopicPartitionListElem) -> TopicPartitionListElem:
        if len(self._elems) >= self._capacity:
            self._capacity = max(self._capacity * 2, len(self._elems) + 1)
        self._elems.append(elem)
        return elem

    def add_topic_unassigned(self, topic: str) -> TopicPartitionListElem:
        """Add a topic with unassigned partitions."""
        return self.add_partition(topic, PARTITION_UNASSIGNED)

    def add_partition(self, topic: str, partition: int) -> TopicPartitionListElem:
        """Add a topic and partition and return the new entry."""
        return self._append(TopicPartitionListElem(_check_topic(topic), partition))

    def add_partition_range(
        self, topic: str, start_partition: int, stop_partition: int
    ) -> None:
        """Add partitions ``start_partition`` to ``stop_partition`` inclusive."""
        _check_topic(topic)
        for partition in range(start_partition, stop_partition + 1):
            self.add_partition(topic, partition)

    def set_partition_offset(self, topic: str, partition: int, offset: Offset) -> None:
        """Set the offset of an existing entry; raise KafkaError if it is absent."""
        elem = self.find_partition(topic, partition)
        if elem is None:
            raise KafkaError(
                f"set partition offset error: unknown partition ({topic}, {partition})"
            )
        elem.offset = offset

    def add_partition_offset(self, topic: str, partition: int, offset: Offset) -> None:
        """Add a topic and partition with the given offset."""
        self.add_partition(topic, partition).offset = offset

    def find_partition(self, topic: str, partition: int) -> TopicPartitionListElem | None:
        """Return the first entry for the topic and partition, or None."""
        _check_topic(topic)
        return next(
            (e for e in self._elems if e.topic == topic and e.partition == partition),
            None,
        )

    def set_all_offsets(self, offset: Offset) -> None:
        """Set every entry to the given offset."""
        for elem in self._elems:
            elem.offset = offset

    def elements(self) -> list[TopicPartitionListElem]:
        """Return all entries."""
        return list(self._elems)

    def elements_for_topic(self, topic: str) -> list[TopicPartitionListElem]:
        """Return the entries belonging to ``topic``."""
        return [e for e in self._elems if e.topic == topic]

    def to_topic_map(self) -> dict[tuple[str, int], Offset]:
        """Return a mapping of (topic, partition) to offset."""
        return {(e.topic, e.partition): e.offset for e in self._elems}

    def extend(self, elems: Iterable[TopicPartitionListElem]) -> None:
        """Append copies of the given entries."""
        for e in elems:
            self._append(TopicPartitionListElem(_check_topic(e.topic), e.partition, e.offset, e.error))