"""
Public id codec.

Internal numeric ids never leave the process; every id in a URL or
JSON body is a Hashids string.
"""
import logging

from hashids import Hashids

from core.application.interfaces import IIdCodec
from core.domain.exceptions import InvalidIdentifier
from core.settings import HashIdSettings

logger = logging.getLogger(__name__)


class HashIdCodec(IIdCodec):
    """Reversible int <-> str encoding backed by the hashids library."""

    def __init__(self, settings: HashIdSettings) -> None:
        self._hashids = Hashids(salt=settings.salt, min_length=settings.min_length)

    def encode(self, value: int) -> str:
        if value is None or value < 0:
            raise ValueError(f"Cannot encode id {value!r}")
        return self._hashids.encode(value)

    def decode(self, value: str) -> int:
        """
        Decode one public id.

        Raises:
            InvalidIdentifier: the string is not exactly one encoded id
        """
        decoded = self._hashids.decode(value) if value else ()
        if len(decoded) != 1:
            logger.debug(f"Rejected malformed id: {value!r}")
            raise InvalidIdentifier(f"Invalid id: {value}")

        # Hashids decodes some foreign strings to numbers that re-encode differently
        if self._hashids.encode(decoded[0]) != value:
            raise InvalidIdentifier(f"Invalid id: {value}")

        return decoded[0]
