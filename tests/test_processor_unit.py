"""Unit tests for batch feed processing."""

import os
from unittest.mock import patch

import pytest

from feednorm.errors import InvalidChannelError, UnsupportedFormatError, XmlSyntaxError
from feednorm.models import FeedType
from feednorm.parser import FeedProcessor, ParseResult, parse_feed

RSS_FEED = "<rss><channel><item><description>Body</description></item></channel></rss>"
ATOM_FEED = "<feed><entry><id>1</id></entry><entry><id>2</id></entry></feed>"


class TestFeedProcessorUnit:
    """Unit tests for FeedProcessor."""

    def test_process_success(self):
        processor = FeedProcessor(extract_content=True)

        result = processor.process("https://example.com/rss", RSS_FEED)

        assert result.ok
        assert result.source == "https://example.com/rss"
        assert result.feed.type is FeedType.RSS
        assert result.error is None

    def test_process_failure_is_captured(self):
        processor = FeedProcessor(extract_content=True)

        result = processor.process("broken", "<rss>")

        assert not result.ok
        assert result.feed is None
        assert isinstance(result.error, XmlSyntaxError)

    def test_process_wrong_type_propagates(self):
        processor = FeedProcessor(extract_content=True)

        with pytest.raises(TypeError):
            processor.process("none", None)

    def test_process_all_continues_after_failures(self):
        processor = FeedProcessor(extract_content=True)

        results = processor.process_all(
            {
                "rss": RSS_FEED,
                "no-channel": "<rss/>",
                "html": "<html/>",
                "atom": ATOM_FEED,
            }
        )

        assert [result.source for result in results] == [
            "rss",
            "no-channel",
            "html",
            "atom",
        ]
        assert [result.ok for result in results] == [True, False, False, True]
        assert isinstance(results[1].error, InvalidChannelError)
        assert isinstance(results[2].error, UnsupportedFormatError)
        assert len(results[3].feed.items) == 2

    def test_process_all_accepts_pairs(self):
        processor = FeedProcessor(extract_content=True)

        results = processor.process_all(iter([("a", ATOM_FEED), ("b", ATOM_FEED)]))

        assert [result.source for result in results] == ["a", "b"]
        assert results[0].feed == results[1].feed

    def test_extract_content_from_environment(self):
        with patch.dict(os.environ, {"FEEDNORM_EXTRACT_CONTENT": "false"}, clear=True):
            processor = FeedProcessor()

        result = processor.process("rss", RSS_FEED)

        assert processor.extract_content is False
        assert result.feed.items[0].description is None

    def test_explicit_flag_beats_environment(self):
        with patch.dict(os.environ, {"FEEDNORM_EXTRACT_CONTENT": "false"}, clear=True):
            processor = FeedProcessor(extract_content=True)

        assert processor.process("rss", RSS_FEED).feed.items[0].description == "Body"

    def test_parse_result_requires_feed_or_error(self):
        with pytest.raises(ValueError):
            ParseResult(source="x")

    def test_parse_result_rejects_feed_and_error(self):
        feed = parse_feed(RSS_FEED)

        with pytest.raises(ValueError):
            ParseResult(source="x", feed=feed, error=UnsupportedFormatError())

    def test_parse_result_ok_reflects_error(self):
        assert ParseResult(source="x", feed=parse_feed(RSS_FEED)).ok
        assert not ParseResult(source="x", error=InvalidChannelError()).ok
