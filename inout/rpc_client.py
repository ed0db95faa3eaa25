# inout/rpc_client.py
"""
HTTP transport for the spectrometer RPC endpoint.

Each exchange is one form-encoded POST carrying ``rpc=<json request>``.
Failures are classified into TransportFailure, DecodeFailure and
ApplicationFailure; ``submit`` hands them, and anything else the worker
raises, to the completion callback instead of raising.
"""
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

import requests

from core.envelope import Envelope, RequestDescriptor, RpcOutcome
from core.exceptions import ApplicationFailure, RpcError, TransportFailure
from utils.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_PATH = "rpc"


class RpcTransport:
    def __init__(self,
                 base_url: str,
                 path: str = DEFAULT_PATH,
                 timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None,
                 max_workers: int = 2) -> None:
        self.endpoint = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="rpc")

    def request(self, descriptor: RequestDescriptor) -> Envelope:
        """
        Perform a single exchange.

        Raises:
            TransportFailure: On connection errors, timeouts or a non-200 status.
            DecodeFailure: If the body is not a valid envelope.
            ApplicationFailure: If the envelope carries a non-empty error.
        """
        logger.debug("POST %s %s", self.endpoint, descriptor.encode())
        try:
            response = self.session.post(self.endpoint, data={"rpc": descriptor.encode()}, timeout=self.timeout)
        except requests.RequestException as e:
            logger.debug("Request for %s failed: %s", descriptor.command, e)
            raise TransportFailure() from e
        if response.status_code != 200:
            raise TransportFailure(status=response.status_code)

        envelope = Envelope.decode(response.text)
        if envelope.is_error:
            raise ApplicationFailure(envelope.error)
        return envelope

    def exchange(self, descriptor: RequestDescriptor) -> RpcOutcome:
        try:
            return RpcOutcome(descriptor, envelope=self.request(descriptor))
        except RpcError as e:
            return RpcOutcome(descriptor, failure=e)

    def submit(self, descriptor: RequestDescriptor, callback: Callable[[RpcOutcome], None]) -> Future:
        """Run the exchange on a worker thread and pass its outcome to ``callback``."""
        def done(f: Future) -> None:
            exc = f.exception()
            if exc is None:
                callback(f.result())
                return
            logger.error("Unexpected error during %s exchange", descriptor.command, exc_info=exc)
            callback(RpcOutcome(descriptor, failure=RpcError(f"unexpected {type(exc).__name__}: {exc}")))

        future = self._executor.submit(self.exchange, descriptor)
        future.add_done_callback(done)
        return future

    def close(self) -> None:
        self._executor.shutdown(wait=False)
        self.session.close()
