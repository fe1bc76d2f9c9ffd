"""Akahu API client: balance source and transfer executor."""

import json
import socket
from decimal import Decimal
from typing import Any, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..config.defaults import get_default_config
from ..data.models import BalanceReading, TransferRequest, TransferResult
from ..data.parsers import parse_account_balance, parse_transfer
from ..errors import BalanceFetchError, CollaboratorError, MalformedResponseError, TransferError
from ..logging import get_logger

logger = get_logger(__name__)


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        # Akahu expects a JSON number for transfer amounts
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class AkahuClient:
    """
    HTTP client for the Akahu personal API.

    Handles authentication headers, request encoding and error translation.
    Every request carries a bounded timeout.
    """

    def __init__(
        self,
        app_token: str,
        user_token: str,
        base_url: Optional[str] = None,
        timeout_seconds: float = 30.0
    ):
        """
        Initialize the client.

        Args:
            app_token: Akahu app token, sent as X-Akahu-Id
            user_token: Akahu user token, sent as the bearer token
            base_url: API base URL (default: https://api.akahu.io/v1)
            timeout_seconds: Timeout applied to every request
        """
        self.app_token = app_token
        self.user_token = user_token
        self.base_url = (base_url or get_default_config().akahu.api_url).rstrip('/')
        self.timeout_seconds = timeout_seconds

    def _headers(self) -> dict[str, str]:
        return {
            'Authorization': f'Bearer {self.user_token}',
            'X-Akahu-Id': self.app_token,
            'Content-Type': 'application/json',
            'Accept': 'application/json',
            'User-Agent': 'auto-banker/1.0'
        }

    def _request(
        self,
        method: str,
        endpoint: str,
        error_cls: type,
        data: Optional[dict[str, Any]] = None
    ) -> Any:
        """
        Make an HTTP request to the API and decode the JSON response.

        Raises:
            error_cls: On non-2xx responses or network failures
            MalformedResponseError: If the body is not JSON
        """
        url = f"{self.base_url}{endpoint}"
        body = json.dumps(data, default=_json_default).encode('utf-8') if data is not None else None

        req = Request(url, data=body, headers=self._headers(), method=method)

        try:
            with urlopen(req, timeout=self.timeout_seconds) as response:
                response_code = response.getcode()
                response_data = response.read().decode('utf-8')

        except HTTPError as e:
            error_body = e.read().decode('utf-8', errors='replace')
            logger.warning(
                "Akahu request failed",
                method=method,
                endpoint=endpoint,
                status=e.code,
                body=error_body[:200]
            )
            raise error_cls(
                f"Akahu {method} {endpoint} failed {e.code}: {error_body}",
                status=e.code,
                body=error_body
            ) from e

        except (OSError, URLError, socket.timeout) as e:
            logger.warning(
                "Akahu network error",
                method=method,
                endpoint=endpoint,
                error=str(e)
            )
            raise error_cls(f"Akahu {method} {endpoint} network error: {e}") from e

        if not 200 <= response_code < 300:
            raise error_cls(
                f"Akahu {method} {endpoint} failed {response_code}: {response_data}",
                status=response_code,
                body=response_data
            )

        try:
            return json.loads(response_data)
        except json.JSONDecodeError as e:
            raise MalformedResponseError(
                f"Akahu {method} {endpoint} returned invalid JSON",
                service="akahu",
                status=response_code,
                body=response_data[:200]
            ) from e

    def get_balance(self, account_id: str) -> BalanceReading:
        """
        Get the current balance of an account.

        Args:
            account_id: Akahu account id (acc_...)

        Returns:
            BalanceReading as reported by the bank; currency is not checked here
        """
        payload = self._request('GET', f'/accounts/{account_id}', BalanceFetchError)
        try:
            return parse_account_balance(payload, account_id)
        except CollaboratorError:
            logger.warning("Unexpected Akahu account payload", account_id=account_id)
            raise

    def create_transfer(self, request: TransferRequest) -> TransferResult:
        """
        Initiate a transfer between two accounts owned by the same user.

        Args:
            request: Transfer to submit

        Returns:
            TransferResult carrying the Akahu transfer id
        """
        data = {
            'from': request.from_account,
            'to': request.to_account,
            'amount': request.amount,
            'meta': {'note': request.note}
        }

        payload = self._request('POST', '/transfers', TransferError, data=data)
        result = parse_transfer(payload)

        logger.info(
            "Akahu transfer created",
            transfer_id=result.transfer_id,
            amount=str(request.amount),
            currency=request.currency
        )
        return result
