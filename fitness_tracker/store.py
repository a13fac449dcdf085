"""Client for the hosted row store that owns profiles and measurements.

The store exposes a PostgREST-style REST interface: tables are reached at
``<base_url>/rest/v1/<table>`` and filtered with query parameters such as
``user_id=eq.<id>``. Authentication is handled by the hosting service; this
client only forwards the API key and the caller's access token.
"""

import logging
from typing import Optional

import requests

from fitness_tracker.config import (
    MEASUREMENTS_TABLE,
    PROFILES_TABLE,
    REQUEST_TIMEOUT,
    STORE_ACCESS_TOKEN,
    STORE_KEY,
    STORE_URL,
    WEIGHT_HISTORY_LIMIT,
)
from fitness_tracker.measurements import latest_measurement, weight_history
from fitness_tracker.models import Measurement, Profile

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """Raised when the row store cannot be reached or rejects a request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _parse_rows(parse, rows: list, table: str) -> list:
    try:
        return [parse(row) for row in rows]
    except (TypeError, ValueError) as e:
        logger.error("Unreadable row in %s: %s", table, e)
        raise StoreError(f"Store returned an unreadable {table} row: {e}") from e


class StoreClient:
    """Thin request/response wrapper around the measurement store."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        access_token: Optional[str] = None,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        if not base_url:
            raise StoreError("Store URL is not configured (set FITNESS_STORE_URL)")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "apikey": api_key,
            "Authorization": f"Bearer {access_token or api_key}",
            "Accept": "application/json",
        })

    @classmethod
    def from_env(cls, session: Optional[requests.Session] = None) -> "StoreClient":
        """Build a client from the FITNESS_STORE_* environment settings."""
        return cls(STORE_URL, STORE_KEY, STORE_ACCESS_TOKEN or None, session=session)

    def _url(self, table: str) -> str:
        return f"{self.base_url}/rest/v1/{table}"

    def _request(self, method: str, table: str, **kwargs):
        url = self._url(table)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.error("%s %s failed with status %s", method, url, status)
            raise StoreError(f"Store request failed ({status}): {table}", status) from e
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise StoreError(f"Could not reach the store: {e}") from e
        return response.json() if response.content else []

    def fetch_profile(self, user_id: str) -> Profile:
        """Sex and date of birth for ``user_id``; an empty profile if none exists."""
        rows = self._request("GET", PROFILES_TABLE, params={
            "select": "gender,date_of_birth",
            "user_id": f"eq.{user_id}",
            "limit": 1,
        })
        if not rows:
            logger.info("No profile found for user %s", user_id)
            return Profile()
        return _parse_rows(Profile.from_row, rows[:1], PROFILES_TABLE)[0]

    def fetch_measurements(self, user_id: str, limit: Optional[int] = None) -> list:
        """Measurement records for ``user_id``, newest first."""
        params = {
            "select": "*",
            "user_id": f"eq.{user_id}",
            "order": "created_at.desc",
        }
        if limit is not None:
            params["limit"] = limit
        rows = self._request("GET", MEASUREMENTS_TABLE, params=params)
        return _parse_rows(Measurement.from_row, rows, MEASUREMENTS_TABLE)

    def fetch_snapshot(self, user_id: str) -> tuple:
        """Profile plus the latest value of every measurement field.

        One request for the profile and one for the measurement history.
        """
        profile = self.fetch_profile(user_id)
        records = self.fetch_measurements(user_id)
        logger.debug("Fetched %d measurement records for user %s", len(records), user_id)
        return profile, latest_measurement(records)

    def fetch_weight_history(self, user_id: str, limit: int = WEIGHT_HISTORY_LIMIT) -> list:
        """The most recent weigh-ins, oldest first, ready for charting."""
        rows = self._request("GET", MEASUREMENTS_TABLE, params={
            "select": "weight,created_at",
            "user_id": f"eq.{user_id}",
            "weight": "not.is.null",
            "order": "created_at.desc",
            "limit": limit,
        })
        return weight_history(_parse_rows(Measurement.from_row, rows, MEASUREMENTS_TABLE), limit)

    def insert_measurement(self, user_id: str, measurement: Measurement) -> dict:
        """Insert a new measurement row. Returns the stored row."""
        row = measurement.to_row()
        row["user_id"] = user_id
        rows = self._request(
            "POST",
            MEASUREMENTS_TABLE,
            json=row,
            headers={"Prefer": "return=representation"},
        )
        logger.info("Saved measurement for user %s", user_id)
        return rows[0] if rows else row
