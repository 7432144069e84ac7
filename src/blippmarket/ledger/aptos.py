"""Read-only Aptos fullnode client for the bonding_curve contract views."""

from __future__ import annotations

import time
from typing import Any, Callable

import httpx
import structlog

from blippmarket.curve.units import shares_to_human
from blippmarket.errors import MarketNotFound
from blippmarket.ledger.rate_limit import TokenBucket, backoff_delay
from blippmarket.models import MarketInfo, MarketState

log = structlog.get_logger(__name__)


class AptosLedgerReader:
    """LedgerReader over `POST {node_url}/view`. Never signs or submits transactions."""

    def __init__(
        self,
        node_url: str,
        contract_address: str,
        module_name: str = "bonding_curve",
        total_issuance: float = 1_000_000_000,
        timeout: float = 30.0,
        rate_per_sec: float = 5.0,
        max_retries: int = 3,
        client: httpx.Client | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.view_url = node_url.rstrip("/") + "/view"
        self.contract_address = contract_address
        self.module_name = module_name
        self.total_issuance = total_issuance
        self.max_retries = max_retries
        self._client = client or httpx.Client(timeout=timeout)
        self._owns_client = client is None
        self._bucket = TokenBucket(rate=rate_per_sec)
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings, **kwargs: Any) -> AptosLedgerReader:
        return cls(
            node_url=settings.node_url,
            contract_address=settings.contract_address,
            module_name=settings.module_name,
            total_issuance=settings.total_issuance,
            timeout=settings.ledger_timeout_sec,
            rate_per_sec=settings.ledger_rate_per_sec,
            max_retries=settings.ledger_max_retries,
            **kwargs,
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> AptosLedgerReader:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def _view(self, function: str, arguments: list[Any]) -> list[Any]:
        """Call a view function. Retries on 429, raises httpx.HTTPStatusError otherwise."""
        body = {
            "function": f"{self.contract_address}::{self.module_name}::{function}",
            "type_arguments": [],
            "arguments": arguments,
        }
        attempt = 0
        while True:
            self._bucket.wait_for_token(sleep=self._sleep)
            resp = self._client.post(self.view_url, json=body)
            if resp.status_code == 429 and attempt < self.max_retries:
                delay = backoff_delay(attempt)
                log.warning("ledger_rate_limited", function=function, attempt=attempt, delay=delay)
                self._sleep(delay)
                attempt += 1
                continue
            resp.raise_for_status()
            data = resp.json()
            log.debug("ledger_view", function=function, arguments=arguments)
            return data if isinstance(data, list) else []

    def market_exists(self, video_id: str) -> bool:
        result = self._view("market_exists", [video_id])
        return bool(result and result[0])

    def get_market_info(self, video_id: str) -> MarketInfo:
        result = self._view("get_market_info", [video_id])
        if len(result) < 5:
            raise MarketNotFound(video_id)
        return MarketInfo.from_view(result)

    def fetch_market_state(self, content_id: str) -> MarketState:
        """Fresh snapshot in human units. Refetch after every trade."""
        if not self.market_exists(content_id):
            raise MarketNotFound(content_id)
        return self.get_market_info(content_id).to_state(self.total_issuance)

    def get_user_share_balance(self, video_id: str, user_address: str) -> float:
        """Trader's share balance in human units (0 when the view returns nothing)."""
        result = self._view("get_user_share_balance", [video_id, user_address])
        return shares_to_human(result[0]) if result else 0.0

    def get_current_price(self, video_id: str) -> int | None:
        """Contract-side spot price, scaled by 10^8 as the contract reports it."""
        result = self._view("get_current_price", [video_id])
        return int(result[0]) if result else None

    def get_market_address(self, video_id: str) -> str | None:
        result = self._view("get_market_address", [video_id])
        return str(result[0]) if result else None
