"""
Тесты для доменных моделей: Token, PriceTable, BalanceSheet, SwapRequest, SwapRecord

Проверяет:
1. Создание и валидацию моделей Pydantic
2. Инварианты (положительные цены, неотрицательные балансы)
3. Immutability (frozen=True)
4. Атомарность перевода в BalanceSheet
5. Сериализацию записи обмена
"""

import pytest
from pydantic import ValidationError

from src.core.domain import (
    DEFAULT_BALANCES,
    DEFAULT_PRICES,
    DEFAULT_TOKENS,
    NEUTRAL_PRICE,
    BalanceSheet,
    PriceTable,
    SwapRecord,
    SwapRequest,
    SwapStatus,
    Token,
    find_token,
    search_tokens,
    validate_token_symbol,
)


# =============================================================================
# TOKEN TESTS
# =============================================================================


class TestTokenSymbol:
    """Тесты для validate_token_symbol"""

    def test_valid_symbol_unchanged(self) -> None:
        assert validate_token_symbol("ETH") == "ETH"
        assert validate_token_symbol("eth") == "eth"

    @pytest.mark.parametrize("symbol", ["", "   ", "\t"])
    def test_empty_symbol_rejected(self, symbol: str) -> None:
        with pytest.raises(ValueError, match="non-empty"):
            validate_token_symbol(symbol)

    def test_non_string_rejected(self) -> None:
        with pytest.raises(ValueError, match="must be a string"):
            validate_token_symbol(42)  # type: ignore[arg-type]


class TestTokenRegistry:
    """Тесты реестра токенов"""

    def test_ten_default_tokens(self) -> None:
        symbols = [token.symbol for token in DEFAULT_TOKENS]
        assert symbols == ["SWTH", "ETH", "BTC", "USDC", "USDT", "SOL", "ADA", "DOT", "LINK", "UNI"]

    def test_default_balances_cover_registry(self) -> None:
        assert set(DEFAULT_BALANCES) == {token.symbol for token in DEFAULT_TOKENS}
        assert DEFAULT_BALANCES["SWTH"] == 1000.0
        assert DEFAULT_BALANCES["ETH"] == 5.0

    def test_icon_url_per_symbol(self) -> None:
        eth = find_token("ETH")
        assert eth is not None
        assert eth.icon_url.endswith("/ETH.svg")
        assert eth.name == "Ethereum"

    def test_find_token_exact_symbol(self) -> None:
        assert find_token("eth") is None
        assert find_token("XYZ") is None

    def test_search_by_symbol_or_name(self) -> None:
        assert [t.symbol for t in search_tokens("ethereum")] == ["ETH"]
        assert [t.symbol for t in search_tokens("eth")] == ["ETH", "USDT"]
        assert [t.symbol for t in search_tokens("coin")] == ["BTC", "USDC"]
        assert [t.symbol for t in search_tokens("  LINK ")] == ["LINK"]

    def test_search_empty_term_returns_all(self) -> None:
        assert search_tokens("") == list(DEFAULT_TOKENS)

    def test_search_no_match(self) -> None:
        assert search_tokens("doge") == []

    def test_token_is_frozen(self) -> None:
        token = Token(symbol="ABC", name="Alphabet", icon_url="")
        with pytest.raises(ValidationError):
            token.symbol = "XYZ"  # type: ignore[misc]


# =============================================================================
# PRICE TABLE TESTS
# =============================================================================


class TestPriceTable:
    """Тесты для модели PriceTable"""

    def test_default_table(self) -> None:
        table = PriceTable.default()
        assert len(table) == 10
        assert table.prices == dict(DEFAULT_PRICES)
        assert table.price_of("ETH") == 2000.0

    def test_missing_token_neutral_price(self) -> None:
        table = PriceTable.default()
        assert not table.has_price("XYZ")
        assert table.price_of("XYZ") == NEUTRAL_PRICE == 1.0

    @pytest.mark.parametrize("price", [0.0, -1.0, float("nan"), float("inf")])
    def test_invalid_price_rejected(self, price: float) -> None:
        with pytest.raises(ValidationError):
            PriceTable(prices={"ETH": price})

    def test_empty_symbol_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PriceTable(prices={"": 1.0})

    def test_with_overlay_returns_new_table(self) -> None:
        table = PriceTable.default()
        updated = table.with_overlay({"ETH": 2500.0, "NEW": 3.0})
        assert updated.price_of("ETH") == 2500.0
        assert updated.price_of("NEW") == 3.0
        assert len(updated) == 11
        # Исходная таблица не изменилась
        assert table.price_of("ETH") == 2000.0
        assert not table.has_price("NEW")

    def test_with_overlay_validates(self) -> None:
        with pytest.raises(ValidationError):
            PriceTable.default().with_overlay({"ETH": 0.0})

    def test_frozen(self) -> None:
        table = PriceTable.default()
        with pytest.raises(ValidationError):
            table.prices = {}  # type: ignore[misc]

    def test_prices_read_only(self) -> None:
        """Содержимое таблицы нельзя изменить в обход валидации"""
        table = PriceTable.default()
        with pytest.raises(TypeError):
            table.prices["ETH"] = 0.0  # type: ignore[index]
        assert table.price_of("ETH") == 2000.0

    def test_source_dict_not_shared(self) -> None:
        source = {"ETH": 2000.0}
        table = PriceTable(prices=source)
        source["ETH"] = 0.0
        assert table.price_of("ETH") == 2000.0

    def test_empty_default_read_only(self) -> None:
        with pytest.raises(TypeError):
            PriceTable().prices["ETH"] = 1.0  # type: ignore[index]


# =============================================================================
# BALANCE SHEET TESTS
# =============================================================================


class TestBalanceSheet:
    """Тесты для модели BalanceSheet"""

    @pytest.fixture
    def sheet(self) -> BalanceSheet:
        return BalanceSheet.from_mapping({"SWTH": 1000.0, "ETH": 5.0})

    def test_default_balances(self) -> None:
        assert BalanceSheet.default().snapshot() == dict(DEFAULT_BALANCES)

    def test_missing_token_zero(self, sheet: BalanceSheet) -> None:
        assert sheet.balance_of("BTC") == 0.0

    def test_negative_balance_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BalanceSheet(balances={"ETH": -0.1})

    def test_credit_and_debit(self, sheet: BalanceSheet) -> None:
        sheet.credit("BTC", 0.5)
        sheet.debit("SWTH", 1000.0)
        assert sheet.balance_of("BTC") == 0.5
        assert sheet.balance_of("SWTH") == 0.0

    def test_debit_over_balance_rejected(self, sheet: BalanceSheet) -> None:
        with pytest.raises(ValueError, match="exceeds balance"):
            sheet.debit("ETH", 5.0001)
        assert sheet.balance_of("ETH") == 5.0

    def test_negative_credit_rejected(self, sheet: BalanceSheet) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            sheet.credit("ETH", -1.0)

    def test_apply_transfer(self, sheet: BalanceSheet) -> None:
        sheet.apply_transfer("SWTH", 100.0, "ETH", 0.005)
        assert sheet.balance_of("SWTH") == pytest.approx(900.0)
        assert sheet.balance_of("ETH") == pytest.approx(5.005)

    def test_apply_transfer_to_new_token(self, sheet: BalanceSheet) -> None:
        sheet.apply_transfer("ETH", 1.0, "BTC", 0.05)
        assert sheet.balance_of("BTC") == pytest.approx(0.05)

    def test_apply_transfer_rejected_before_mutation(self, sheet: BalanceSheet) -> None:
        """Отказ — ни один баланс не меняется"""
        before = sheet.snapshot()
        with pytest.raises(ValueError):
            sheet.apply_transfer("ETH", 6.0, "SWTH", 1000.0)
        with pytest.raises(ValueError):
            sheet.apply_transfer("ETH", 1.0, "SWTH", -1.0)
        assert sheet.snapshot() == before

    def test_apply_transfer_same_token(self, sheet: BalanceSheet) -> None:
        sheet.apply_transfer("ETH", 2.0, "ETH", 2.0)
        assert sheet.balance_of("ETH") == pytest.approx(5.0)

    def test_snapshot_is_copy(self, sheet: BalanceSheet) -> None:
        snapshot = sheet.snapshot()
        snapshot["ETH"] = 0.0
        assert sheet.balance_of("ETH") == 5.0


# =============================================================================
# SWAP MODELS TESTS
# =============================================================================


class TestSwapRequest:
    """Тесты для модели SwapRequest"""

    def test_valid_request(self) -> None:
        request = SwapRequest(from_token="SWTH", to_token="ETH", from_amount=100.0)
        assert request.from_amount == 100.0

    def test_negative_amount_reaches_engine(self) -> None:
        """Отрицательная сумма не ошибка модели: её отклоняет validate_transfer"""
        request = SwapRequest(from_token="SWTH", to_token="ETH", from_amount=-1.0)
        assert request.from_amount == -1.0

    def test_nan_amount_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SwapRequest(from_token="SWTH", to_token="ETH", from_amount=float("nan"))

    def test_empty_token_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SwapRequest(from_token=" ", to_token="ETH", from_amount=1.0)


class TestSwapRecord:
    """Тесты для модели SwapRecord"""

    def test_success_record(self) -> None:
        record = SwapRecord(
            from_token="SWTH",
            from_amount=100.0,
            to_token="ETH",
            to_amount=0.005,
            status=SwapStatus.SUCCESS,
        )
        assert record.is_success
        assert record.failure_reason is None
        assert record.timestamp.tzinfo is not None
        assert record.summary() == "100.0 SWTH → 0.005 ETH"

    def test_failed_record_requires_reason(self) -> None:
        with pytest.raises(ValidationError, match="failure_reason"):
            SwapRecord(
                from_token="SWTH",
                from_amount=100.0,
                to_token="ETH",
                to_amount=0.0,
                status=SwapStatus.FAILED,
            )

    def test_success_record_rejects_reason(self) -> None:
        with pytest.raises(ValidationError):
            SwapRecord(
                from_token="SWTH",
                from_amount=100.0,
                to_token="ETH",
                to_amount=0.005,
                status=SwapStatus.SUCCESS,
                failure_reason="insufficient_balance",
            )

    def test_success_record_rejects_negative_amount(self) -> None:
        with pytest.raises(ValidationError):
            SwapRecord(
                from_token="SWTH",
                from_amount=-1.0,
                to_token="ETH",
                to_amount=0.0,
                status=SwapStatus.SUCCESS,
            )

    def test_payload_json_compatible(self) -> None:
        record = SwapRecord(
            from_token="SWTH",
            from_amount=-1.0,
            to_token="ETH",
            to_amount=0.0,
            status=SwapStatus.FAILED,
            failure_reason="negative_amount",
        )
        payload = record.to_payload()
        assert payload["status"] == "failed"
        assert payload["failure_reason"] == "negative_amount"
        assert isinstance(payload["timestamp"], str)

    def test_frozen(self) -> None:
        record = SwapRecord(
            from_token="SWTH",
            from_amount=1.0,
            to_token="ETH",
            to_amount=0.00005,
            status=SwapStatus.SUCCESS,
        )
        with pytest.raises(ValidationError):
            record.to_amount = 1.0  # type: ignore[misc]
