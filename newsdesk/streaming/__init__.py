"""Streaming utilities."""

from newsdesk.streaming.sse import PipelineStreamingGenerator, StreamEventType, StreamingGenerator

__all__ = ["StreamingGenerator", "PipelineStreamingGenerator", "StreamEventType"]
