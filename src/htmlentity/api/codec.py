"""Configured codec API.

HTMLEntityCodec binds a CodecConfig and a correlation-aware logger to the
encode and decode functions, for callers that run many operations with the
same settings.
"""

import time
from typing import Optional

from htmlentity.character import ByteInput
from htmlentity.entity import decode, encode_filter
from htmlentity.entity.charset import should_escape
from htmlentity.shared import CodedData, get_logger
from htmlentity.shared.config import CodecConfig

MS_PER_SECOND = 1000


class HTMLEntityCodec:
    """HTML entity encoder/decoder with fixed configuration.

    Examples:
        >>> codec = HTMLEntityCodec(CodecConfig.ascii_safe())
        >>> codec.encode_text("café <b>")
        'caf&eacute; &lt;b&gt;'
        >>> codec.decode_text("caf&eacute;")
        'café'
    """

    def __init__(
        self,
        config: Optional[CodecConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize codec.

        Args:
            config: Codec configuration (uses default if None)
            correlation_id: Optional correlation ID attached to log records
        """
        self.config = config or CodecConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "entity_codec")

    def _should_encode(self, char: str) -> bool:
        return should_escape(ord(char), self.config.charset)

    def _exclude_named(self, char: str) -> bool:
        return char in self.config.exclude_named

    def encode(self, data: ByteInput) -> CodedData:
        """Escape ``data`` using the configured mode and character set."""
        start_time = time.perf_counter()
        result = encode_filter(
            data,
            self._should_encode,
            self.config.mode,
            self._exclude_named if self.config.exclude_named else None,
        )
        self._log_operation("encode", result, start_time)
        return result

    def decode(self, data: ByteInput) -> CodedData:
        """Resolve every entity reference in ``data``."""
        start_time = time.perf_counter()
        result = decode(data)
        self._log_operation("decode", result, start_time)
        return result

    def encode_text(self, text: ByteInput) -> str:
        """Escape ``text`` and return the result as a string."""
        return self.encode(text).to_text(self.config.errors)

    def decode_text(self, text: ByteInput) -> str:
        """Unescape ``text`` and return the result as a string.

        Raises:
            InvalidEncodingError: If the decoded bytes are not valid UTF-8 and
                the configured error handler is ``strict``
        """
        return self.decode(text).to_text(self.config.errors)

    def _log_operation(
        self, operation: str, result: CodedData, start_time: float
    ) -> None:
        if not self.config.log_statistics:
            return
        processing_time = (time.perf_counter() - start_time) * MS_PER_SECOND
        self.logger.operation_summary(
            operation,
            {"units": len(result), **result.statistics},
            processing_time,
        )
