import dataclasses

import pytest

from moments.domain.presets import SmartSensitivity
from moments.domain.segmenters import SmartSegmenter, compute_time_threshold
from moments.domain.segmenters.smart import (
    DEFAULT_TIME_THRESHOLD_SEC,
    MAX_TIME_THRESHOLD_SEC,
    MIN_TIME_THRESHOLD_SEC,
)


def _ids(segments):
    return [[e.id for e in segment] for segment in segments]


def _events_with_gaps(make_event, gaps):
    events = [make_event("e0", 0)]
    offset = 0.0
    for i, gap in enumerate(gaps, start=1):
        offset += gap
        events.append(make_event(f"e{i}", offset))
    return events


@pytest.mark.parametrize("sensitivity", list(SmartSensitivity))
def test_day_gap_always_splits(make_event, sensitivity):
    events = [
        make_event("first", 0, lat=40.0, lon=-74.0),
        make_event("second", 90_000, lat=40.0, lon=-74.0),
    ]

    segments = SmartSegmenter(sensitivity).segment(events)

    assert _ids(segments) == [["first"], ["second"]]


def test_location_change_splits_after_short_pause(make_event):
    # ~2 km apart, 10 minutes apart
    events = [
        make_event("cafe", 0, lat=48.0, lon=11.0),
        make_event("park", 600, lat=48.018, lon=11.0),
    ]
    segmenter = SmartSegmenter(SmartSensitivity.TIGHT, location_threshold_m=1000, min_pause_sec=120)

    assert _ids(segmenter.segment(events)) == [["cafe"], ["park"]]


def test_location_change_ignored_without_enough_pause(make_event):
    events = [
        make_event("cafe", 0, lat=48.0, lon=11.0),
        make_event("park", 60, lat=48.018, lon=11.0),
    ]
    segmenter = SmartSegmenter(SmartSensitivity.TIGHT, location_threshold_m=1000, min_pause_sec=120)

    assert _ids(segmenter.segment(events)) == [["cafe", "park"]]


def test_location_tier_needs_two_located_events(make_event):
    events = [
        make_event("cafe", 0, lat=48.0, lon=11.0),
        make_event("unknown", 600),
        make_event("park", 1200, lat=48.018, lon=11.0),
    ]

    segments = SmartSegmenter(SmartSensitivity.TIGHT).segment(events)

    assert _ids(segments) == [["cafe", "unknown", "park"]]


def test_nearby_location_does_not_split(make_event):
    events = [
        make_event("gate", 0, lat=48.0, lon=11.0),
        make_event("stage", 600, lat=48.005, lon=11.0),
    ]

    assert len(SmartSegmenter(SmartSensitivity.TIGHT).segment(events)) == 1


def test_adaptive_threshold_splits_long_within_day_pause(make_event):
    events = _events_with_gaps(make_event, [300] * 10 + [3 * 3600] + [300] * 10)

    segments = SmartSegmenter().segment(events)

    assert [len(s) for s in segments] == [11, 11]


def test_missing_timestamp_never_splits(make_event):
    events = [make_event("a", 0), make_event("gap", None), make_event("b", 30)]

    assert _ids(SmartSegmenter().segment(events)) == [["a", "gap", "b"]]


def test_single_event_is_one_segment(make_event):
    event = make_event("only", 0)
    assert SmartSegmenter().segment([event]) == [[event]]


def test_empty_input_yields_no_segments():
    assert SmartSegmenter().segment([]) == []


def test_segments_cover_input_in_order(make_event):
    events = _events_with_gaps(make_event, [5, 400, 7200, 30, 100_000, 50, 3600 * 20, 90])
    events[3] = dataclasses.replace(events[3], timestamp=None)

    segments = SmartSegmenter(SmartSensitivity.LOOSE).segment(events)

    assert [e for segment in segments for e in segment] == events


def test_threshold_defaults_when_only_bursts(make_event):
    events = _events_with_gaps(make_event, [1, 5, 30, 59])

    assert compute_time_threshold(events) == DEFAULT_TIME_THRESHOLD_SEC


def test_threshold_ignores_burst_gaps(make_event):
    # Counting the nine 10 s bursts would pull the percentile down to the floor
    events = _events_with_gaps(make_event, [10] * 9 + [7200])

    assert compute_time_threshold(events) == 7200


def test_threshold_uses_nearest_rank_percentile(make_event):
    hours = [3600 * k for k in range(1, 12)]
    events = _events_with_gaps(make_event, list(reversed(hours)))

    # floor((11 - 1) * 0.9) = 9 -> the tenth smallest gap
    assert compute_time_threshold(events) == 10 * 3600


def test_threshold_is_clamped_to_lower_bound(make_event):
    events = _events_with_gaps(make_event, [120] * 20)

    assert compute_time_threshold(events) == MIN_TIME_THRESHOLD_SEC


def test_threshold_is_clamped_to_upper_bound(make_event):
    events = _events_with_gaps(make_event, [20 * 3600] * 5)

    assert compute_time_threshold(events) == MAX_TIME_THRESHOLD_SEC


def test_threshold_with_no_events():
    assert compute_time_threshold([]) == DEFAULT_TIME_THRESHOLD_SEC
