"""Streaming response consumption for chat and writing-assistant requests."""

from src.streaming.abort import AbortSignal
from src.streaming.consumer import StreamConsumer
from src.streaming.decoder import SSELineDecoder, parse_frame

__all__ = ["AbortSignal", "SSELineDecoder", "StreamConsumer", "parse_frame"]
