"""
ERP HTTP Dispatcher
===================

Outbound HTTP call ke ERP dengan bounded timeout dan exponential backoff.

timeout_seconds adalah deadline total satu attempt (connect sampai body
selesai dibaca), bukan timeout per operasi socket seperti httpx.Timeout.

Klasifikasi hasil:
- status < 400      -> ok, stop
- 400 <= status < 500 -> terminal, stop tanpa retry
- 5xx / timeout / connection error -> transient, retry kalau attempts masih ada
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from ..exceptions import ERPIntegrationError, TransientNetworkError, TerminalERPRejection

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    response: Optional[httpx.Response]
    attempts: int
    last_error: Optional[TransientNetworkError] = None

    @property
    def ok(self) -> bool:
        return self.response is not None and self.response.status_code < 400

    @property
    def terminal(self) -> bool:
        return self.response is not None and 400 <= self.response.status_code < 500

    @property
    def error(self) -> Optional[ERPIntegrationError]:
        """Error yang menjelaskan kenapa dispatch gagal, None kalau ok"""
        if self.ok:
            return None
        if self.terminal:
            return TerminalERPRejection(self.response.status_code, erp_response=self.response.text)
        if self.last_error is not None:
            return self.last_error
        status = self.response.status_code if self.response is not None else None
        return ERPIntegrationError(f"HTTP {status}")


class HttpDispatcher:
    """Kirim satu request ke ERP, retry dengan backoff 2^attempt detik"""

    def __init__(self, user_agent: Optional[str] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None,
                 sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep):
        self.user_agent = user_agent
        self.transport = transport
        self.sleep = sleep

    async def send(self, url: str, method: str, headers: Dict[str, str], body: Any,
                   timeout_seconds: float, retry_attempts: int) -> DispatchResult:
        request_headers = dict(headers)
        if self.user_agent and not any(key.lower() == 'user-agent' for key in request_headers):
            request_headers['User-Agent'] = self.user_agent

        response: Optional[httpx.Response] = None
        last_error: Optional[TransientNetworkError] = None
        attempts = 0

        async with httpx.AsyncClient(transport=self.transport, timeout=timeout_seconds) as client:
            for attempt in range(retry_attempts + 1):
                attempts = attempt + 1
                try:
                    response = await asyncio.wait_for(
                        client.request(method, url, headers=request_headers, json=body),
                        timeout=timeout_seconds
                    )
                except (httpx.TimeoutException, asyncio.TimeoutError) as e:
                    last_error = TransientNetworkError(f"ERP request timed out after {timeout_seconds}s",
                                                       details={'exception': e.__class__.__name__})
                    logger.warning(f"{method} {url} attempt {attempts} timed out")
                except httpx.TransportError as e:
                    last_error = TransientNetworkError(f"Failed to connect to ERP: {str(e) or e.__class__.__name__}",
                                                       details={'exception': e.__class__.__name__})
                    logger.warning(f"{method} {url} attempt {attempts} failed: {last_error.message}")
                else:
                    last_error = None
                    logger.info(f"{method} {url} attempt {attempts} -> HTTP {response.status_code}")
                    if response.status_code < 400:
                        break
                    if response.status_code < 500:
                        # Client errors are not retried
                        break

                if attempt < retry_attempts:
                    delay = 2 ** attempt
                    logger.info(f"Retrying {method} {url} in {delay}s")
                    await self.sleep(delay)

        return DispatchResult(response=response, attempts=attempts, last_error=last_error)
