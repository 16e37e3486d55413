"""Tests for the play-by-play log and its sinks."""

import logging

import pytest

from courtlab.core.event_log import EventLog, RecordingSink
from courtlab.models.events import MadeShot, MissedShot, QuarterEnd, ShotClockViolation


class ExplodingSink:
    def add_event(self, event_type, payload, clock):
        raise RuntimeError("display went away")


class TestEventLog:
    def test_append_and_read(self):
        log = EventLog()
        event = log.append(ShotClockViolation(team="A"), time=24, quarter=1, shot_clock=0)
        assert len(log) == 1
        assert log[0] == event
        assert log.last == event
        assert event.event_type == "shotClockViolation"

    def test_empty_log(self):
        log = EventLog()
        assert log.last is None
        assert list(log) == []

    def test_same_second_allowed(self):
        log = EventLog()
        log.append(MissedShot(team="A", player=1, shot_type="two"), time=5, quarter=1, shot_clock=19)
        log.append(ShotClockViolation(team="A"), time=5, quarter=1, shot_clock=19)
        assert len(log) == 2

    def test_out_of_order_rejected(self):
        log = EventLog()
        log.append(ShotClockViolation(team="A"), time=30, quarter=1, shot_clock=0)
        with pytest.raises(ValueError):
            log.append(ShotClockViolation(team="B"), time=10, quarter=1, shot_clock=0)
        assert len(log) == 1

    def test_earlier_quarter_rejected(self):
        log = EventLog()
        log.append(QuarterEnd(quarter=1, score_a=0, score_b=0), time=0, quarter=2, shot_clock=24)
        with pytest.raises(ValueError):
            log.append(ShotClockViolation(team="B"), time=600, quarter=1, shot_clock=0)

    def test_of_type(self):
        log = EventLog()
        log.append(ShotClockViolation(team="A"), time=1, quarter=1, shot_clock=0)
        log.append(
            MadeShot(team="B", player=2, shot_type="three", points=3), time=2, quarter=1, shot_clock=20
        )
        log.append(ShotClockViolation(team="B"), time=3, quarter=1, shot_clock=0)
        assert [e.payload.team for e in log.of_type("shotClockViolation")] == ["A", "B"]
        assert len(log.of_type("rebound")) == 0

    def test_slice(self):
        log = EventLog()
        for t in range(4):
            log.append(ShotClockViolation(team="A"), time=t, quarter=1, shot_clock=0)
        assert [e.time for e in log[2:]] == [2, 3]


class TestSinks:
    def test_sink_receives_payload_and_clock(self):
        sink = RecordingSink()
        log = EventLog(sinks=[sink])
        log.append(
            MadeShot(team="A", player=3, shot_type="two", points=2, assist=1),
            time=42,
            quarter=2,
            shot_clock=11,
        )
        event_type, payload, clock = sink.received[0]
        assert event_type == "madeShot"
        assert payload == {
            "team": "A",
            "player": 3,
            "shot_type": "two",
            "points": 2,
            "assist": 1,
        }
        assert clock == {"game_time": 42, "quarter": 2, "shot_clock": 11}

    def test_failing_sink_is_isolated(self, caplog):
        good = RecordingSink()
        log = EventLog(sinks=[ExplodingSink(), good])
        with caplog.at_level(logging.ERROR, logger="courtlab.core.event_log"):
            log.append(ShotClockViolation(team="A"), time=1, quarter=1, shot_clock=0)
        assert len(log) == 1
        assert len(good.received) == 1
        assert "event sink" in caplog.text

    def test_sinks_added_later_see_new_events(self):
        sinks: list = []
        log = EventLog(sinks=sinks)
        log.append(ShotClockViolation(team="A"), time=1, quarter=1, shot_clock=0)
        sink = RecordingSink()
        sinks.append(sink)
        log.append(ShotClockViolation(team="B"), time=2, quarter=1, shot_clock=0)
        assert len(sink.received) == 1

    def test_sink_cannot_mutate_log(self):
        class MutatingSink:
            def add_event(self, event_type, payload, clock):
                payload["team"] = "B"

        log = EventLog(sinks=[MutatingSink()])
        log.append(ShotClockViolation(team="A"), time=1, quarter=1, shot_clock=0)
        assert log[0].payload.team == "A"
