"""
Shared plumbing for Ksher services.
"""

import logging
from typing import Any, Callable, Dict, Optional

from ..client import KsherClient
from ..constants import Operation
from ..exceptions import KsherException
from ..schemas import KsherResponse

logger = logging.getLogger(__name__)


class BaseService:
    """
    Base class for services grouping Ksher operations.
    All services built without a client share one built from Django settings.
    """

    _default_client: Optional[KsherClient] = None

    def __init__(self, client: Optional[KsherClient] = None):
        self.client = client or self._get_default_client()

    @classmethod
    def _get_default_client(cls) -> KsherClient:
        if BaseService._default_client is None:
            BaseService._default_client = KsherClient()
        return BaseService._default_client

    def _execute(self, operation: Operation, fields: Dict[str, Any]) -> KsherResponse:
        return self._call(operation.value, self.client.request, operation, fields)

    def _call(self, name: str, method: Callable[..., KsherResponse], *args: Any) -> KsherResponse:
        logger.info(f"Calling Ksher {name}")
        try:
            response = method(*args)
        except KsherException as e:
            logger.error(f"Ksher {name} failed: {str(e)}")
            raise

        if response.is_success:
            logger.info(f"Ksher {name} succeeded")
        else:
            logger.warning(
                f"Ksher {name} returned code {response.code}: "
                f"{response.msg or response.message}"
            )
        return response
