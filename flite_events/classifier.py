"""Partitioning and ordering of feed records into upcoming and past events."""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from .models import ClassificationResult, EmptyFeed, EventRecord, FeedData, FeedFailure, FeedOutcome
from .timezone_utils import to_utc

logger = logging.getLogger(__name__)


class EventClassifier:
    """Splits feed records into upcoming and past sets relative to one ``now``."""

    def filter_upcoming(
        self, events: Iterable[EventRecord], now: datetime.datetime
    ) -> list[EventRecord]:
        """Events that have not ended yet. An event ending exactly at ``now`` is upcoming."""
        return [e for e in events if e.end_date_time >= now]

    def filter_past(
        self, events: Iterable[EventRecord], now: datetime.datetime
    ) -> list[EventRecord]:
        """Events that ended strictly before ``now``."""
        return [e for e in events if e.end_date_time < now]

    def sort_upcoming(self, events: Iterable[EventRecord]) -> list[EventRecord]:
        """Soonest first; equal start times keep feed order."""
        return sorted(events, key=lambda e: e.start_date_time)

    def sort_past(self, events: Iterable[EventRecord]) -> list[EventRecord]:
        """Most recent first; equal start times keep feed order."""
        return sorted(events, key=lambda e: e.start_date_time, reverse=True)

    def validate_records(self, raw_events: Iterable[Any], source: str) -> list[EventRecord]:
        """Validate feed records one by one, skipping the invalid ones.

        Args:
            raw_events: Raw event objects from one feed list
            source: Feed key the list came from, used in log messages

        Returns:
            Valid records in feed order
        """
        events: list[EventRecord] = []
        skipped = 0
        for index, raw in enumerate(raw_events):
            try:
                events.append(EventRecord.model_validate(raw))
            except ValidationError as e:
                skipped += 1
                logger.debug("Invalid record %s[%d]: %s", source, index, e)

        if skipped:
            logger.warning("Skipped %d invalid record(s) in %s", skipped, source)
        return events

    def classify(
        self,
        payload: Any,
        now: datetime.datetime,
        enable_past: bool,
    ) -> FeedOutcome:
        """Validate a decoded feed payload and partition its events.

        Args:
            payload: Decoded JSON body of the feed
            now: Single time reference used for every comparison
            enable_past: Whether to build the past partition at all

        Returns:
            ClassificationResult on success, EmptyFeed when the feed reports
            no success or carries no data section, FeedFailure when the
            payload or its data section is malformed. Individual invalid
            records are skipped
        """
        if not isinstance(payload, Mapping):
            logger.warning("Feed payload is not an object: %s", type(payload).__name__)
            return FeedFailure(message="Feed payload is not a JSON object")

        data = payload.get("data")
        # A falsy data section (null, false, "", 0) means no data; {} is an empty feed
        if not payload.get("success") or (not data and not isinstance(data, Mapping)):
            logger.debug("Feed returned no data (success=%r)", payload.get("success"))
            return EmptyFeed()

        if not isinstance(data, Mapping):
            logger.warning("Feed data section is not an object: %s", type(data).__name__)
            return FeedFailure(message="Feed data section is not a JSON object")

        try:
            feed = FeedData.model_validate(data)
        except ValidationError as e:
            logger.warning("Malformed feed data (%d errors): %s", e.error_count(), e)
            return FeedFailure(message=f"Malformed feed data: {e.error_count()} invalid field(s)")

        now = to_utc(now)
        source = self.validate_records(feed.upcoming_events or [], "upcomingEvents")

        upcoming = self.filter_upcoming(source, now)
        past: list[EventRecord] = []
        if enable_past:
            if feed.past_events is not None:
                past = self.validate_records(feed.past_events, "pastEvents")
            else:
                past = self.filter_past(source, now)

        result = ClassificationResult(
            upcoming=tuple(self.sort_upcoming(upcoming)),
            past=tuple(self.sort_past(past)),
        )
        logger.debug(
            "Classified %d upcoming and %d past events (now=%s)",
            len(result.upcoming),
            len(result.past),
            now.isoformat(),
        )
        return result


_classifier = EventClassifier()


def classify(payload: Any, now: datetime.datetime, enable_past: bool) -> FeedOutcome:
    """Classify a feed payload (convenience function)."""
    return _classifier.classify(payload, now, enable_past)
