"""Typed view of the client statistics JSON document."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Mapping

_I32 = (-(2**31), 2**31 - 1)
_I64 = (-(2**63), 2**63 - 1)
_INT_KEY = re.compile(r"-?\d+")


class StatisticsError(ValueError):
    """Raised when a statistics document does not have the expected shape."""


def _mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise StatisticsError(f"{what} must be an object, got {type(value).__name__}")
    return value


def _require(data: Mapping[str, Any], name: str) -> Any:
    try:
        return data[name]
    except KeyError:
        raise StatisticsError(f"missing field `{name}`") from None


def _int(data: Mapping[str, Any], name: str, bounds: tuple[int, int] = _I64) -> int:
    value = _require(data, name)
    if isinstance(value, bool) or not isinstance(value, int):
        raise StatisticsError(f"field `{name}` must be an integer, got {value!r}")
    low, high = bounds
    if not low <= value <= high:
        raise StatisticsError(f"field `{name}` is out of range: {value}")
    return value


def _optional_int(data: Mapping[str, Any], name: str) -> int | None:
    if data.get(name) is None:
        return None
    return _int(data, name)


def _str(data: Mapping[str, Any], name: str) -> str:
    value = _require(data, name)
    if not isinstance(value, str):
        raise StatisticsError(f"field `{name}` must be a string, got {value!r}")
    return value


def _bool(data: Mapping[str, Any], name: str) -> bool:
    value = _require(data, name)
    if not isinstance(value, bool):
        raise StatisticsError(f"field `{name}` must be a boolean, got {value!r}")
    return value


def _object(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    return _mapping(_require(data, name), f"field `{name}`")


def _partition_key(key: str) -> int:
    if not isinstance(key, str) or not _INT_KEY.fullmatch(key):
        raise StatisticsError(f"partition key must be an integer, got {key!r}")
    value = int(key)
    if not _I32[0] <= value <= _I32[1]:
        raise StatisticsError(f"partition key is out of range: {value}")
    return value


@dataclass(frozen=True)
class Window:
    """Rolling window statistics (latencies, throttle times)."""

    min: int
    max: int
    avg: int
    sum: int
    cnt: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Window:
        data = _mapping(data, "window")
        return cls(**{name: _int(data, name) for name in ("min", "max", "avg", "sum", "cnt")})


def _optional_window(data: Mapping[str, Any], name: str) -> Window | None:
    value = data.get(name)
    return None if value is None else Window.from_dict(value)


@dataclass(frozen=True)
class TopicPartition:
    """A topic and partition handled by a broker."""

    topic: str
    partition: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TopicPartition:
        data = _mapping(data, "topic partition")
        return cls(topic=_str(data, "topic"), partition=_int(data, "partition", _I32))


_BROKER_COUNTERS = (
    "stateage",
    "outbuf_cnt",
    "outbuf_msg_cnt",
    "waitresp_cnt",
    "waitresp_msg_cnt",
    "tx",
    "txbytes",
    "txerrs",
    "txretries",
    "req_timeouts",
    "rx",
    "rxbytes",
    "rxerrs",
    "rxcorriderrs",
    "rxpartial",
    "zbuf_grow",
    "buf_grow",
)


@dataclass(frozen=True)
class Broker:
    """Per-broker statistics."""

    name: str
    nodeid: int
    state: str
    stateage: int
    outbuf_cnt: int
    outbuf_msg_cnt: int
    waitresp_cnt: int
    waitresp_msg_cnt: int
    tx: int
    txbytes: int
    txerrs: int
    txretries: int
    req_timeouts: int
    rx: int
    rxbytes: int
    rxerrs: int
    rxcorriderrs: int
    rxpartial: int
    zbuf_grow: int
    buf_grow: int
    wakeups: int | None
    int_latency: Window | None
    rtt: Window | None
    throttle: Window | None
    toppars: dict[str, TopicPartition]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Broker:
        data = _mapping(data, "broker")
        return cls(
            name=_str(data, "name"),
            nodeid=_int(data, "nodeid", _I32),
            state=_str(data, "state"),
            **{name: _int(data, name) for name in _BROKER_COUNTERS},
            wakeups=_optional_int(data, "wakeups"),
            int_latency=_optional_window(data, "int_latency"),
            rtt=_optional_window(data, "rtt"),
            throttle=_optional_window(data, "throttle"),
            toppars={
                key: TopicPartition.from_dict(value)
                for key, value in _object(data, "toppars").items()
            },
        )


_PARTITION_COUNTERS = (
    "msgq_cnt",
    "msgq_bytes",
    "xmit_msgq_cnt",
    "xmit_msgq_bytes",
    "fetchq_cnt",
    "fetchq_size",
    "query_offset",
    "next_offset",
    "app_offset",
    "stored_offset",
    "committed_offset",
    "eof_offset",
    "lo_offset",
    "hi_offset",
    "consumer_lag",
    "txmsgs",
    "txbytes",
    "msgs",
    "rx_ver_drops",
)


@dataclass(frozen=True)
class Partition:
    """Per-partition statistics."""

    partition: int
    leader: int
    desired: bool
    unknown: bool
    msgq_cnt: int
    msgq_bytes: int
    xmit_msgq_cnt: int
    xmit_msgq_bytes: int
    fetchq_cnt: int
    fetchq_size: int
    fetch_state: str
    query_offset: int
    next_offset: int
    app_offset: int
    stored_offset: int
    committed_offset: int
    eof_offset: int
    lo_offset: int
    hi_offset: int
    consumer_lag: int
    txmsgs: int
    txbytes: int
    msgs: int
    rx_ver_drops: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Partition:
        data = _mapping(data, "partition")
        return cls(
            partition=_int(data, "partition", _I32),
            leader=_int(data, "leader", _I32),
            desired=_bool(data, "desired"),
            unknown=_bool(data, "unknown"),
            fetch_state=_str(data, "fetch_state"),
            **{name: _int(data, name) for name in _PARTITION_COUNTERS},
        )


@dataclass(frozen=True)
class Topic:
    """Per-topic statistics."""

    topic: str
    metadata_age: int
    partitions: dict[int, Partition]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Topic:
        data = _mapping(data, "topic")
        return cls(
            topic=_str(data, "topic"),
            metadata_age=_int(data, "metadata_age"),
            partitions={
                _partition_key(key): Partition.from_dict(value)
                for key, value in _object(data, "partitions").items()
            },
        )


@dataclass(frozen=True)
class ConsumerGroup:
    """Consumer group statistics."""

    rebalance_age: int
    rebalance_cnt: int
    assignment_size: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ConsumerGroup:
        data = _mapping(data, "consumer group")
        return cls(
            rebalance_age=_int(data, "rebalance_age"),
            rebalance_cnt=_int(data, "rebalance_cnt"),
            assignment_size=_int(data, "assignment_size", _I32),
        )


_CLIENT_COUNTERS = (
    "ts",
    "time",
    "replyq",
    "msg_cnt",
    "msg_size",
    "msg_max",
    "msg_size_max",
    "simple_cnt",
)


@dataclass(frozen=True)
class Statistics:
    """Top-level client statistics; the JSON ``type`` field is ``client_type``."""

    name: str
    client_type: str
    ts: int
    time: int
    replyq: int
    msg_cnt: int
    msg_size: int
    msg_max: int
    msg_size_max: int
    simple_cnt: int
    brokers: dict[str, Broker]
    topics: dict[str, Topic]
    cgrp: ConsumerGroup | None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Statistics:
        data = _mapping(data, "statistics")
        cgrp = data.get("cgrp")
        return cls(
            name=_str(data, "name"),
            client_type=_str(data, "type"),
            **{name: _int(data, name) for name in _CLIENT_COUNTERS},
            brokers={
                key: Broker.from_dict(value)
                for key, value in _object(data, "brokers").items()
            },
            topics={
                key: Topic.from_dict(value)
                for key, value in _object(data, "topics").items()
            },
            cgrp=None if cgrp is None else ConsumerGroup.from_dict(cgrp),
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> Statistics:
        """Parse a statistics JSON document."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StatisticsError(f"invalid statistics JSON: {exc}") from exc
        return cls.from_dict(data)