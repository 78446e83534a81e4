"""ConversionEngine — движок обмена токенов одной сессии

Состояние (владеет движок на всё время сессии):
- PriceTable: текущий снапшот спот-цен
- BalanceSheet: балансы пользователя
- SwapHistory: последние 5 попыток обмена, последняя первой

Применение обмена (apply_swap):
1. Синхронная валидация validate_transfer
2. Отказ → балансы не трогаются, в историю пишется запись status=failed
3. Допуск → имитация обработки (asyncio.sleep, единственная точка
   приостановки), затем конверсия по ценам на момент применения,
   изменение балансов и запись status=success — одним шагом без await

Все мутации (apply_swap, refresh_prices) сериализованы одним asyncio.Lock:
при перекрывающихся вызовах никто не видит балансы без записи в истории
и наоборот.
"""

import asyncio
import uuid
from dataclasses import dataclass
from typing import Any, Optional

from src.core.config import EngineConfig
from src.core.contracts import SwapRecordValidator
from src.core.domain.balance_sheet import BalanceSheet
from src.core.domain.price_table import PriceTable
from src.core.domain.swap import SwapRecord, SwapRequest, SwapStatus
from src.core.domain.token import TokenSymbol
from src.core.log import get_logger
from src.core.math.conversion import convert, exchange_rate
from src.pricing.feed import load_remote_prices_async
from src.swap.fees import network_fee_usd
from src.swap.history import SwapHistory
from src.swap.validation import TransferCheckResult, validate_transfer


# =============================================================================
# QUOTE
# =============================================================================


@dataclass(frozen=True)
class SwapQuote:
    """Предварительный расчёт обмена по текущим ценам (ничего не фиксирует)."""

    from_token: TokenSymbol
    to_token: TokenSymbol
    from_amount: float
    to_amount: float
    rate: float
    network_fee_usd: float


# =============================================================================
# ENGINE
# =============================================================================


class ConversionEngine:
    """Движок конверсии и обмена.

    UI держит ссылку на движок и вызывает его методы; глобального
    состояния нет. Наружу отдаются только снапшоты.
    """

    def __init__(
        self,
        prices: Optional[PriceTable] = None,
        balances: Optional[BalanceSheet] = None,
        config: Optional[EngineConfig] = None,
    ):
        """
        Args:
            prices: начальная таблица цен (default: таблица по умолчанию)
            balances: начальные балансы (default: стартовые балансы сессии)
            config: конфигурация движка (default: EngineConfig())
        """
        self.config = config or EngineConfig()
        self.session_id = str(uuid.uuid4())
        self.logger = get_logger(__name__, session_id=self.session_id)

        self._prices = prices if prices is not None else PriceTable.default()
        # Собственная копия: балансы меняются только под self._lock
        self._balances = (
            BalanceSheet.from_mapping(balances.snapshot())
            if balances is not None
            else BalanceSheet.default()
        )
        self._history = SwapHistory(self.config.history_capacity)
        self._lock = asyncio.Lock()
        self._record_validator = SwapRecordValidator()

    @classmethod
    def create_default(cls, config: Optional[EngineConfig] = None) -> "ConversionEngine":
        """Новая сессия: цены и балансы по умолчанию."""
        return cls(prices=PriceTable.default(), balances=BalanceSheet.default(), config=config)

    # -------------------------------------------------------------------------
    # Снапшоты состояния
    # -------------------------------------------------------------------------

    @property
    def prices(self) -> PriceTable:
        return self._prices

    @property
    def balances(self) -> dict[TokenSymbol, float]:
        return self._balances.snapshot()

    @property
    def history(self) -> list[SwapRecord]:
        return self._history.records()

    @property
    def is_busy(self) -> bool:
        """True пока выполняется обмен или обновление цен."""
        return self._lock.locked()

    def balance_of(self, token: TokenSymbol) -> float:
        return self._balances.balance_of(token)

    def max_amount(self, token: TokenSymbol) -> float:
        """Максимальная сумма обмена — весь баланс токена."""
        return self._balances.balance_of(token)

    def export_history(self) -> list[dict[str, Any]]:
        """
        История в JSON-совместимом виде, каждая запись проверена контрактом
        swap_record.

        Raises:
            jsonschema.ValidationError: Если запись нарушает контракт
        """
        payloads = [record.to_payload() for record in self._history]
        for payload in payloads:
            self._record_validator.validate(payload)
        return payloads

    # -------------------------------------------------------------------------
    # Цены
    # -------------------------------------------------------------------------

    def set_prices(self, prices: PriceTable) -> None:
        self._prices = prices
        self.logger.info("price table replaced", tokens=len(prices))

    async def refresh_prices(self) -> PriceTable:
        """
        Перезагрузка цен из источника (ожидание ограничено
        config.price_fetch_timeout_sec; при сбое — значения по умолчанию).
        """
        async with self._lock:
            prices = await load_remote_prices_async(config=self.config)
            self.set_prices(prices)
            return prices

    # -------------------------------------------------------------------------
    # Конверсия и проверки
    # -------------------------------------------------------------------------

    def convert(self, amount: float, from_token: TokenSymbol, to_token: TokenSymbol) -> float:
        return convert(amount, from_token, to_token, self._prices)

    def validate(self, amount: float, token: TokenSymbol) -> TransferCheckResult:
        return validate_transfer(amount, token, self._balances)

    def quote(self, from_token: TokenSymbol, to_token: TokenSymbol, from_amount: float) -> SwapQuote:
        """Расчёт обмена по текущим ценам без изменения состояния."""
        return SwapQuote(
            from_token=from_token,
            to_token=to_token,
            from_amount=from_amount,
            to_amount=convert(from_amount, from_token, to_token, self._prices),
            rate=exchange_rate(from_token, to_token, self._prices),
            network_fee_usd=network_fee_usd(from_token),
        )

    # -------------------------------------------------------------------------
    # Обмен
    # -------------------------------------------------------------------------

    async def apply_swap(self, request: SwapRequest) -> SwapRecord:
        """
        Применение обмена.

        Args:
            request: запрос на обмен

        Returns:
            SwapRecord: status=success при выполненном обмене,
            status=failed при отказе валидации (балансы не изменены)
        """
        async with self._lock:
            check = validate_transfer(request.from_amount, request.from_token, self._balances)
            if not check.allowed:
                return self._record_failure(request, check)

            self.logger.info(
                "swap accepted, processing",
                from_token=request.from_token,
                to_token=request.to_token,
                from_amount=request.from_amount,
                latency_sec=self.config.swap_latency_sec,
            )
            await asyncio.sleep(self.config.swap_latency_sec)

            # Цена не фиксируется заранее: берётся таблица на момент применения
            to_amount = convert(
                request.from_amount, request.from_token, request.to_token, self._prices
            )
            record = SwapRecord(
                from_token=request.from_token,
                from_amount=request.from_amount,
                to_token=request.to_token,
                to_amount=to_amount,
                status=SwapStatus.SUCCESS,
            )
            self._balances.apply_transfer(
                request.from_token, request.from_amount, request.to_token, to_amount
            )
            self._append(record)

            self.logger.info(
                "swap applied",
                from_token=record.from_token,
                from_amount=record.from_amount,
                to_token=record.to_token,
                to_amount=record.to_amount,
            )
            return record

    def _record_failure(self, request: SwapRequest, check: TransferCheckResult) -> SwapRecord:
        record = SwapRecord(
            from_token=request.from_token,
            from_amount=request.from_amount,
            to_token=request.to_token,
            to_amount=0.0,
            status=SwapStatus.FAILED,
            failure_reason=check.block_reason,
        )
        self._append(record)
        self.logger.warning(
            "swap rejected",
            reason=check.block_reason,
            details=check.details,
            from_token=request.from_token,
            to_token=request.to_token,
        )
        return record

    def _append(self, record: SwapRecord) -> None:
        evicted = self._history.append(record)
        if evicted is not None:
            self.logger.debug("history record evicted", evicted=evicted.summary())
