"""
Token booking: bounded pools of normal and priority tokens.

Every active print job holds one token of its tier. A token is taken when
the job is created and given back when the job finishes, fails or is
cancelled. Each tier also caps the billable pages (pages x copies) of a job.

Thread Safety:
    - All pool operations hold a threading.Lock
"""

from __future__ import annotations

import threading
from typing import Dict, Any

from core.exceptions import TokenUnavailableError, ValidationError
from models.print_settings import TokenType
from logging_config import get_logger


logger = get_logger(__name__)


class TokenService:
    """Tracks which jobs hold which token tier."""

    def __init__(
        self,
        normal_capacity: int = 50,
        priority_capacity: int = 20,
        normal_max_pages: int = 20,
        priority_max_pages: int = 80,
    ):
        self._capacity = {
            TokenType.NORMAL: normal_capacity,
            TokenType.PRIORITY: priority_capacity,
        }
        self._max_pages = {
            TokenType.NORMAL: normal_max_pages,
            TokenType.PRIORITY: priority_max_pages,
        }
        self._holders: Dict[int, TokenType] = {}
        self._lock = threading.Lock()

    def _in_use(self, token_type: TokenType) -> int:
        return sum(1 for held in self._holders.values() if held is token_type)

    def available(self, token_type: TokenType) -> int:
        with self._lock:
            return self._capacity[token_type] - self._in_use(token_type)

    def check(self, token_type: TokenType, billable_pages: int) -> None:
        """
        Validate that a job of this size can get a token of this tier.

        Raises:
            ValidationError: If the job exceeds the tier's page limit
            TokenUnavailableError: If the pool is exhausted
        """
        max_pages = self._max_pages[token_type]
        if billable_pages > max_pages:
            hint = " Please use a priority token or reduce pages." if token_type is TokenType.NORMAL else " Please reduce pages."
            raise ValidationError(
                f"{token_type.value.capitalize()} token allows maximum {max_pages} pages.{hint}",
                field="tokenType",
            )
        if self.available(token_type) <= 0:
            raise TokenUnavailableError(token_type.value)

    def reserve(self, job_id: int, token_type: TokenType) -> None:
        with self._lock:
            if job_id in self._holders:
                return
            if self._in_use(token_type) >= self._capacity[token_type]:
                raise TokenUnavailableError(token_type.value)
            self._holders[job_id] = token_type
        logger.debug(f"Job {job_id} holds a {token_type.value} token")

    def release(self, job_id: int) -> bool:
        """Give back the job's token. Returns False if it held none."""
        with self._lock:
            token_type = self._holders.pop(job_id, None)
        if token_type is None:
            return False
        logger.debug(f"Job {job_id} released its {token_type.value} token")
        return True

    def availability(self) -> Dict[str, Any]:
        with self._lock:
            return {
                token_type.value: {
                    "available": self._capacity[token_type] - self._in_use(token_type),
                    "total": self._capacity[token_type],
                    "maxPages": self._max_pages[token_type],
                }
                for token_type in TokenType
            }
