# kafkatools

This package gives you plain-Python data structures for working with Kafka clients. It has no
dependencies outside the standard library.

- `kafkatools.topic_partition_list` provides `Offset`, `TopicPartitionList`,
  `TopicPartitionListElem` and `KafkaError`.
- `kafkatools.statistics` provides `Statistics` and its parts: `Broker`, `Topic`, `Partition`,
  `TopicPartition`, `Window` and `ConsumerGroup`. It also provides `StatisticsError`.
- `kafkatools.util` provides `Timeout` and the millisecond helpers `duration_to_millis`,
  `millis_to_epoch` and `current_time_millis`, plus `bytes_cstr_to_owned`.

## What this package does not do

The package does not connect to Kafka brokers. It has no producer, consumer or admin client, and
it sends and receives no messages. It also offers no command-line tool. It only models and checks
the data those clients work with.

## Installation

```
pip install .
```

## Offsets

`Offset` is a frozen value. It is either one of the logical offsets `Offset.BEGINNING`,
`Offset.END`, `Offset.STORED` and `Offset.INVALID`, or a specific offset made with `Offset.at(n)`.
`to_raw()` and `Offset.from_raw()` convert to and from the integer wire form:

| Offset             | raw value |
|--------------------|-----------|
| `Offset.BEGINNING` | -2        |
| `Offset.END`       | -1        |
| `Offset.STORED`    | -1000     |
| `Offset.INVALID`   | -1001     |
| `Offset.at(n)`     | n         |

Any other raw value becomes `Offset.at(raw)`.

## Topic partition lists

```python
from kafkatools.topic_partition_list import Offset, TopicPartitionList

tpl = TopicPartitionList()
tpl.add_partition_range("events", 0, 3)          # partitions 0..3 inclusive
tpl.set_partition_offset("events", 1, Offset.at(42))
tpl.add_partition_offset("audit", 0, Offset.BEGINNING)

elem = tpl.find_partition("events", 1)
print(elem.topic, elem.partition, elem.offset)   # events 1 Offset.at(42)

topic_map = tpl.to_topic_map()                   # {(topic, partition): Offset}
assert TopicPartitionList.from_topic_map(topic_map) == tpl
```

- A newly added partition starts with the offset `Offset.INVALID`. `add_topic_unassigned(topic)`
  adds the topic with partition `-1`.
- `set_partition_offset` raises `KafkaError` if the topic and partition are not in the list.
- `find_partition` returns the matching entry or `None`. The entry it returns is live: if you
  assign to its `offset`, the list changes.
- `elements()`, `elements_for_topic(topic)` and `set_all_offsets(offset)` work on all entries,
  or on the entries of one topic. `extend(entries)` appends copies of the given entries. `len()`
  and iteration work as usual.
- `copy()` returns an independent copy.
- Two lists are equal when they have the same length and every entry has a match in the other
  list with the same topic, partition and offset.
- `repr()` gives `TPL {(events, 0): Offset.INVALID, ...}`.
- `capacity` grows as entries are added. `TopicPartitionList(capacity)` sets its starting value.
- A topic name that contains a NUL character raises `ValueError`.
- An entry may carry an `error` string. `TopicPartitionListElem.check_error()` raises
  `KafkaError` when an error is set.

## Statistics

```python
from kafkatools.statistics import Statistics

stats = Statistics.from_json(json_text)
print(stats.name, stats.client_type, len(stats.brokers))
for partition_id, partition in stats.topics["events"].partitions.items():
    print(partition_id, partition.consumer_lag)   # partition_id is an int
```

The JSON field `type` is exposed as `client_type`. Some parts are optional and become `None`
when they are absent: the broker fields `wakeups`, `int_latency`, `rtt` and `throttle`, and the
top-level `cgrp`. `Statistics.from_dict` accepts a document that is already decoded.

A malformed document raises `StatisticsError`, a subclass of `ValueError`. That covers invalid
JSON, missing fields, values of the wrong type, and integers out of range. Unknown fields are
ignored.

## Timeouts and time helpers

```python
from datetime import datetime, timedelta, timezone
from kafkatools.util import Timeout, duration_to_millis, millis_to_epoch

Timeout.after(timedelta(seconds=2)).as_millis()      # 2000
Timeout.never().as_millis()                          # -1
Timeout.from_value(None) == Timeout.never()          # True
duration_to_millis(timedelta(milliseconds=1500))     # 1500
millis_to_epoch(datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc))  # 1000
```

- Timeouts are ordered, and a never-ending timeout is greater than any finite one.
- Subtracting a finite timeout from a never-ending one leaves it never-ending.
- Subtracting a never-ending timeout raises `ValueError`, as does a subtraction whose result
  would be negative.
- `millis_to_epoch` treats naive datetimes as UTC and returns 0 for times before the epoch.
- `current_time_millis()` returns the current time in milliseconds since the epoch.
- `bytes_cstr_to_owned` decodes bytes up to the first NUL and replaces invalid UTF-8.

## Running the tests

```
pip install .[test]
pytest
```