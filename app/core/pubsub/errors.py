"""Errors raised while appending report events to Redis Streams."""


class PubSubError(Exception):
    """Redis Streams could not be reached or refused a command."""


class PublishError(PubSubError):
    """A report event could not be built or appended to its stream."""
