"""
Random byte generation for RMCP+ session nonces and console session IDs.

Two sources share one interface:

- SecureRandomSource draws from the OpenSSL generator after mixing bytes
  read from the system entropy source into its state.
- DeterministicRandomSource produces the fixed pattern 0x70 | i so that
  generated material is easy to spot in packet hex dumps. It is insecure and
  is only created through an explicit opt-in.

The source is picked once, when it is constructed, and never per call.
"""

import logging
import ssl
import threading
from typing import Optional, Union

from .constants import DEFAULT_SEED_BYTES, FAKE_RANDOM_BASE
from .utils import LanplusCryptError, PreconditionError, secure_zero

logger = logging.getLogger(__name__)

DEFAULT_ENTROPY_SOURCE = "/dev/urandom"

WritableBuffer = Union[bytearray, memoryview]


class SeedError(LanplusCryptError):
    """Raised when the entropy source cannot be opened or read in full."""
    pass


class RandomError(LanplusCryptError):
    """Raised when the generator is not ready or cannot produce the bytes."""
    pass


def _check_count(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise PreconditionError(f"{name} must be int")
    if value < 0:
        raise PreconditionError(f"{name} must be non-negative")


def _writable_view(buffer: WritableBuffer, length: int) -> memoryview:
    """Validate a caller buffer and return a byte view of it."""
    if not isinstance(buffer, (bytearray, memoryview)):
        raise PreconditionError("buffer must be a bytearray or writable memoryview")
    view = memoryview(buffer)
    if view.readonly:
        raise PreconditionError("buffer is read-only")
    if not view.c_contiguous:
        raise PreconditionError("buffer must be contiguous")
    view = view.cast("B")
    _check_count("length", length)
    if length > len(view):
        raise PreconditionError(
            f"length {length} exceeds buffer size {len(view)}"
        )
    return view


class RandomSource:
    """
    Interface shared by the random sources.

    Lifecycle: call seed() once, then fill() or random_bytes() as needed.
    """

    name = "abstract"
    insecure = False

    def seed(self, byte_count: int = DEFAULT_SEED_BYTES) -> None:
        raise NotImplementedError

    @property
    def is_seeded(self) -> bool:
        raise NotImplementedError

    def fill(self, buffer: WritableBuffer, length: int) -> None:
        raise NotImplementedError

    def random_bytes(self, length: int) -> bytes:
        """
        Return length fresh bytes from this source.

        Raises:
            RandomError: If the source cannot produce the bytes
        """
        _check_count("length", length)
        buffer = bytearray(length)
        self.fill(buffer, length)
        return bytes(buffer)


class SecureRandomSource(RandomSource):
    """
    Production source backed by the process-wide OpenSSL generator.

    seed() reads byte_count bytes from the entropy source and mixes them into
    the generator state with RAND_add; the local copy is wiped afterwards.
    fill() refuses to run before a successful seed().
    """

    name = "secure"

    def __init__(self, entropy_source: str = DEFAULT_ENTROPY_SOURCE):
        """
        Initialize secure source.

        Args:
            entropy_source: Path to the non-blocking system entropy device
        """
        self.entropy_source = entropy_source
        self._seeded = False
        self._lock = threading.Lock()

    @property
    def is_seeded(self) -> bool:
        return self._seeded

    def seed(self, byte_count: int = DEFAULT_SEED_BYTES) -> None:
        """
        Seed the generator from the system entropy source.

        Args:
            byte_count: Number of bytes to read from the entropy source

        Raises:
            SeedError: If the source cannot be opened or read in full
        """
        _check_count("byte_count", byte_count)
        pool = bytearray(byte_count)
        try:
            read = self._read_entropy(pool)
            if read != byte_count:
                raise SeedError(
                    f"Short read from {self.entropy_source}: "
                    f"wanted {byte_count} bytes, got {read}"
                )
            ssl.RAND_add(pool, byte_count)
        finally:
            secure_zero(pool)

        with self._lock:
            self._seeded = True
        logger.debug("Seeded random source from %s (%d bytes)",
                     self.entropy_source, byte_count)

    def _read_entropy(self, pool: bytearray) -> int:
        read = 0
        try:
            with open(self.entropy_source, "rb", buffering=0) as source:
                view = memoryview(pool)
                while read < len(pool):
                    n = source.readinto(view[read:])
                    if not n:
                        break
                    read += n
        except OSError as e:
            raise SeedError(
                f"Cannot read entropy source {self.entropy_source}: {e}"
            ) from e
        return read

    def fill(self, buffer: WritableBuffer, length: int) -> None:
        """
        Write length random bytes into buffer[0:length].

        Raises:
            RandomError: If the source is not seeded or the generator fails
            PreconditionError: If buffer or length is invalid
        """
        view = _writable_view(buffer, length)
        with self._lock:
            seeded = self._seeded
        if not seeded:
            raise RandomError("Random source has not been seeded")
        if length == 0:
            return

        try:
            data = ssl.RAND_bytes(length)
        except ssl.SSLError as e:
            raise RandomError(f"OpenSSL random generator failed: {e}") from e

        if len(data) != length:
            raise RandomError(
                f"OpenSSL random generator returned {len(data)} of {length} bytes"
            )
        view[:length] = data


class DeterministicRandomSource(RandomSource):
    """
    INSECURE source that writes byte i = 0x70 | i.

    Meant for tracing session establishment by eye; never for a live session.
    """

    name = "deterministic"
    insecure = True

    @property
    def is_seeded(self) -> bool:
        return True

    def seed(self, byte_count: int = DEFAULT_SEED_BYTES) -> None:
        """Accept and ignore a seed request; the pattern does not depend on it."""
        _check_count("byte_count", byte_count)

    def fill(self, buffer: WritableBuffer, length: int) -> None:
        view = _writable_view(buffer, length)
        for i in range(length):
            view[i] = (FAKE_RANDOM_BASE | i) & 0xFF


_default_source: Optional[SecureRandomSource] = None
_default_lock = threading.Lock()


def get_default_source() -> SecureRandomSource:
    """Return the shared secure source used by seed_prng()."""
    global _default_source
    with _default_lock:
        if _default_source is None:
            _default_source = SecureRandomSource()
        return _default_source


def seed_prng(byte_count: int = DEFAULT_SEED_BYTES,
              source: Optional[RandomSource] = None) -> RandomSource:
    """
    Seed a random source, the shared secure source by default.

    Args:
        byte_count: Number of entropy bytes to read
        source: Source to seed instead of the shared one

    Returns:
        The seeded source

    Raises:
        SeedError: If seeding fails
    """
    target = source if source is not None else get_default_source()
    target.seed(byte_count)
    return target


def create_random_source(config=None) -> RandomSource:
    """
    Create the random source selected by a LanplusConfig.

    The deterministic source is only returned when the configuration carries
    insecure_fake_random=True, and a warning is logged every time.

    Args:
        config: LanplusConfig, or None for production defaults

    Returns:
        An unseeded RandomSource
    """
    if config is not None and config.insecure_fake_random:
        logger.warning(
            "Using INSECURE deterministic random source (0x%02x | i); "
            "session nonces will be predictable", FAKE_RANDOM_BASE
        )
        return DeterministicRandomSource()

    entropy_source = DEFAULT_ENTROPY_SOURCE
    if config is not None:
        entropy_source = config.entropy_source
    return SecureRandomSource(entropy_source=entropy_source)
