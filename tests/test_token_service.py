"""Unit tests for the token pools."""

import threading

import pytest

from core.exceptions import TokenUnavailableError, ValidationError
from models.print_settings import TokenType
from services.token_service import TokenService


class TestTokenService:

    def test_initial_availability(self, tokens):
        availability = tokens.availability()
        assert availability["normal"] == {"available": 50, "total": 50, "maxPages": 20}
        assert availability["priority"] == {"available": 20, "total": 20, "maxPages": 80}

    def test_normal_page_limit(self, tokens):
        tokens.check(TokenType.NORMAL, 20)
        with pytest.raises(ValidationError, match="Normal token allows maximum 20 pages"):
            tokens.check(TokenType.NORMAL, 21)

    def test_priority_page_limit(self, tokens):
        tokens.check(TokenType.PRIORITY, 80)
        with pytest.raises(ValidationError):
            tokens.check(TokenType.PRIORITY, 81)

    def test_reserve_and_release(self, tokens):
        tokens.reserve(1, TokenType.PRIORITY)
        assert tokens.available(TokenType.PRIORITY) == 19
        assert tokens.release(1) is True
        assert tokens.release(1) is False
        assert tokens.available(TokenType.PRIORITY) == 20

    def test_reserve_is_idempotent_per_job(self, tokens):
        tokens.reserve(1, TokenType.NORMAL)
        tokens.reserve(1, TokenType.NORMAL)
        assert tokens.available(TokenType.NORMAL) == 49

    def test_exhausted_pool(self):
        tokens = TokenService(normal_capacity=1)
        tokens.reserve(1, TokenType.NORMAL)
        with pytest.raises(TokenUnavailableError):
            tokens.check(TokenType.NORMAL, 1)
        with pytest.raises(TokenUnavailableError):
            tokens.reserve(2, TokenType.NORMAL)
        # Other tier unaffected
        tokens.check(TokenType.PRIORITY, 1)

    def test_concurrent_reservations_never_exceed_capacity(self):
        tokens = TokenService(normal_capacity=10)
        failures = []

        def grab(job_id):
            try:
                tokens.reserve(job_id, TokenType.NORMAL)
            except TokenUnavailableError:
                failures.append(job_id)

        threads = [threading.Thread(target=grab, args=(i,)) for i in range(25)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert tokens.available(TokenType.NORMAL) == 0
        assert len(failures) == 15
