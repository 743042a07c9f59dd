from __future__ import annotations

from typing import Generator, Generic, Iterator, Optional, TypeVar

import structlog

T = TypeVar("T")

logger = structlog.get_logger(__name__)


class Stream(Generic[T]):
    """
    Secuencia perezosa y finita sobre un generador productor.

    - el productor avanza sólo cuando el consumidor pide el siguiente item
    - ``close()`` detiene el productor (corre sus ``finally``) aunque no se haya agotado
    - se cierra solo al agotarse y al salir de un ``with``
    """

    def __init__(self, producer: Generator[T, None, None], name: str = "stream"):
        self._producer: Optional[Generator[T, None, None]] = producer
        self._name = name
        self._emitted = 0

    @classmethod
    def empty(cls, name: str = "stream") -> "Stream[T]":
        return cls(_nothing(), name=name)

    @property
    def closed(self) -> bool:
        return self._producer is None

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        if self._producer is None:
            raise StopIteration
        try:
            item = next(self._producer)
        except BaseException:
            # agotado o el productor falló: no se vuelve a tocar
            self._producer = None
            raise
        self._emitted += 1
        return item

    def pull(self) -> Optional[T]:
        """Siguiente item, o None si ya no hay (agotado o cerrado)."""
        return next(self, None)

    def close(self) -> None:
        if self._producer is None:
            return
        producer, self._producer = self._producer, None
        producer.close()
        logger.debug("stream_closed", stream=self._name, emitted=self._emitted)

    def __enter__(self) -> "Stream[T]":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def _nothing() -> Generator:
    return
    yield
