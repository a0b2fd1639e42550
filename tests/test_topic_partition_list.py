import pytest

from kafkatools.topic_partition_list import (
    KafkaError,
    Offset,
    OffsetKind,
    TopicPartitionList,
    TopicPartitionListElem,
)


def test_add_partition_offset_find():
    tpl = TopicPartitionList()
    tpl.add_partition("topic1", 0)
    tpl.add_partition("topic1", 1)
    tpl.add_partition("topic2", 0)
    tpl.add_partition("topic2", 1)

    tpl.set_partition_offset("topic1", 0, Offset.at(0))
    tpl.set_partition_offset("topic1", 1, Offset.at(1))
    tpl.set_partition_offset("topic2", 0, Offset.at(2))
    tpl.set_partition_offset("topic2", 1, Offset.at(3))

    assert len(tpl) == 4
    with pytest.raises(KafkaError):
        tpl.set_partition_offset("topic0", 3, Offset.at(0))
    with pytest.raises(KafkaError):
        tpl.set_partition_offset("topic3", 0, Offset.at(0))

    tp0 = tpl.find_partition("topic1", 0)
    tp1 = tpl.find_partition("topic1", 1)
    tp2 = tpl.find_partition("topic2", 0)
    tp3 = tpl.find_partition("topic2", 1)

    assert (tp0.topic, tp0.partition, tp0.offset) == ("topic1", 0, Offset.at(0))
    assert (tp1.topic, tp1.partition, tp1.offset) == ("topic1", 1, Offset.at(1))
    assert (tp2.topic, tp2.partition, tp2.offset) == ("topic2", 0, Offset.at(2))
    assert (tp3.topic, tp3.partition, tp3.offset) == ("topic2", 1, Offset.at(3))

    tp3.offset = Offset.at(1234)
    assert tpl.find_partition("topic2", 1).offset == Offset.at(1234)


def test_add_partition_range():
    tpl = TopicPartitionList()
    tpl.add_partition_range("topic1", 0, 3)
    for i in range(4):
        tpl.set_partition_offset("topic1", i, Offset.at(i))
    with pytest.raises(KafkaError):
        tpl.set_partition_offset("topic1", 4, Offset.at(2))
    assert [e.partition for e in tpl] == [0, 1, 2, 3]


def test_check_defaults():
    tpl = TopicPartitionList()
    tpl.add_partition("topic1", 0)
    assert tpl.find_partition("topic1", 0).offset == Offset.INVALID


def test_add_partition_offset_clone():
    tpl = TopicPartitionList()
    tpl.add_partition_offset("topic1", 0, Offset.at(0))
    tpl.add_partition_offset("topic1", 1, Offset.at(1))

    for source in (tpl, tpl.copy()):
        tp0 = source.find_partition("topic1", 0)
        tp1 = source.find_partition("topic1", 1)
        assert (tp0.topic, tp0.partition, tp0.offset) == ("topic1", 0, Offset.at(0))
        assert (tp1.topic, tp1.partition, tp1.offset) == ("topic1", 1, Offset.at(1))


def test_copy_is_independent():
    tpl = TopicPartitionList()
    tpl.add_partition_offset("t", 0, Offset.at(5))
    clone = tpl.copy()
    clone.set_partition_offset("t", 0, Offset.END)
    assert tpl.find_partition("t", 0).offset == Offset.at(5)
    assert clone.find_partition("t", 0).offset == Offset.END


def test_topic_map():
    topic_map = {
        ("topic1", 0): Offset.INVALID,
        ("topic1", 1): Offset.at(123),
        ("topic2", 0): Offset.BEGINNING,
    }
    tpl = TopicPartitionList.from_topic_map(topic_map)
    topic_map2 = tpl.to_topic_map()
    tpl2 = TopicPartitionList.from_topic_map(topic_map2)
    assert topic_map == topic_map2
    assert tpl == tpl2


def test_equality_ignores_order_but_not_offsets():
    a = TopicPartitionList()
    a.add_partition_offset("t", 0, Offset.at(1))
    a.add_partition_offset("t", 1, Offset.at(2))
    b = TopicPartitionList()
    b.add_partition_offset("t", 1, Offset.at(2))
    b.add_partition_offset("t", 0, Offset.at(1))
    assert a == b
    b.set_partition_offset("t", 0, Offset.at(9))
    assert not a == b
    c = TopicPartitionList()
    c.add_partition("t", 0)
    assert not a == c


@pytest.mark.parametrize(
    "raw, expected",
    [
        (-2, Offset.BEGINNING),
        (-1, Offset.END),
        (-1000, Offset.STORED),
        (-1001, Offset.INVALID),
        (0, Offset.at(0)),
        (427, Offset.at(427)),
    ],
)
def test_offset_raw_round_trip(raw, expected):
    assert Offset.from_raw(raw) == expected
    assert expected.to_raw() == raw


def test_offset_kinds_and_validation():
    assert Offset.at(7).kind is OffsetKind.OFFSET
    assert Offset.at(7).value == 7
    with pytest.raises(TypeError):
        Offset.at("7")
    with pytest.raises(ValueError):
        Offset(OffsetKind.END, 3)


def test_set_all_offsets_and_elements_for_topic():
    tpl = TopicPartitionList()
    tpl.add_partition_range("a", 0, 2)
    tpl.add_partition("b", 0)
    tpl.set_all_offsets(Offset.STORED)
    assert all(e.offset == Offset.STORED for e in tpl.elements())
    assert [e.partition for e in tpl.elements_for_topic("a")] == [0, 1, 2]
    assert [e.topic for e in tpl.elements_for_topic("b")] == ["b"]
    assert tpl.elements_for_topic("c") == []


def test_add_topic_unassigned():
    tpl = TopicPartitionList()
    elem = tpl.add_topic_unassigned("t")
    assert (elem.topic, elem.partition, elem.offset) == ("t", -1, Offset.INVALID)


def test_find_missing_partition_returns_none():
    tpl = TopicPartitionList()
    tpl.add_partition("t", 0)
    assert tpl.find_partition("t", 1) is None


def test_repr():
    tpl = TopicPartitionList()
    tpl.add_partition_offset("t", 0, Offset.at(3))
    tpl.add_partition_offset("t", 1, Offset.BEGINNING)
    assert repr(tpl) == "TPL {(t, 0): Offset.at(3), (t, 1): Offset.BEGINNING, }"


def test_capacity_grows():
    tpl = TopicPartitionList(1)
    assert tpl.capacity == 1
    tpl.add_partition_range("t", 0, 4)
    assert len(tpl) == 5
    assert tpl.capacity >= 5
    with pytest.raises(ValueError):
        TopicPartitionList(-1)


def test_topic_with_nul_rejected():
    tpl = TopicPartitionList()
    with pytest.raises(ValueError):
        tpl.add_partition("bad\x00topic", 0)


def test_elem_check_error():
    ok = TopicPartitionListElem("t", 0, Offset.at(1))
    ok.check_error()
    assert ok.offset == Offset.at(1)
    bad = TopicPartitionListElem("t", 0, Offset.at(1), error="broker down")
    with pytest.raises(KafkaError, match="broker down"):
        bad.check_error()
    assert bad == ok