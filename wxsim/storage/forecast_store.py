"""Storage boundary: byte-level save/load plus forecast helpers on top."""

import logging
import sqlite3
from typing import Protocol

from wxsim.models.forecast import DailyForecast
from wxsim.storage import blob_repo
from wxsim.storage.codec import ForecastDecodeError, decode_forecast, encode_forecast

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    def save(self, key: str, data: bytes) -> None: ...

    def load(self, key: str) -> bytes | None: ...

    def delete(self, key: str) -> bool: ...


class SqliteBlobStore:
    """BlobStore backed by the ``blobs`` table."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def save(self, key: str, data: bytes) -> None:
        blob_repo.save_blob(self.conn, key, data)

    def load(self, key: str) -> bytes | None:
        return blob_repo.load_blob(self.conn, key)

    def delete(self, key: str) -> bool:
        return blob_repo.delete_blob(self.conn, key)


def persist_forecast(store: BlobStore, key: str, forecast: DailyForecast) -> None:
    store.save(key, encode_forecast(forecast))


def restore_forecast(
    store: BlobStore,
    key: str,
    min_temp: int | None = None,
    max_temp: int | None = None,
) -> DailyForecast | None:
    """Load a stored forecast; anything unusable counts as absent.

    A rejected blob is deleted so later starts do not trip over it again.
    """
    blob = store.load(key)
    if blob is None:
        return None
    try:
        forecast = decode_forecast(blob, min_temp, max_temp)
    except ForecastDecodeError as e:
        logger.warning("Discarding stored forecast %r: %s", key, e)
        store.delete(key)
        return None
    if not forecast.is_complete:
        logger.warning(
            "Stored forecast %r covers %d of 24 hours", key, len(forecast.samples)
        )
    return forecast
