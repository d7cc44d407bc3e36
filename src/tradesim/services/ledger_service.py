"""Ledger service: the only writer of account balances, holdings and the order log."""

import logging
import uuid
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Callable, Iterator, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from tradesim.core.exceptions import (
    InsufficientBalanceError,
    InsufficientFundsError,
    InsufficientSharesError,
    InvalidQuantityError,
    NotFoundError,
    PersistenceFailureError,
    ValidationError,
)
from tradesim.core.money import ZERO, percent, quantize_price, to_decimal
from tradesim.core.timezone import now_eastern
from tradesim.domain.models import (
    Account,
    Achievement,
    FundTransfer,
    GameScore,
    GameType,
    RiskProfile,
    Transaction,
    TransactionType,
    TransferDirection,
)
from tradesim.domain.views import (
    AccountSnapshot,
    AchievementCounters,
    AchievementReport,
    HoldingView,
    RiskAnswer,
    RiskAssessment,
)
from tradesim.repositories.protocols import (
    AccountRepository,
    GameScoreRepository,
    TransactionRepository,
    TransferRepository,
)
from tradesim.services.account_locks import AccountLockRegistry
from tradesim.services.achievement_evaluator import AchievementEvaluator
from tradesim.services.holding_store import HoldingStore
from tradesim.services.instrument_catalog import InstrumentCatalog
from tradesim.services.risk_scorer import RiskScorer

logger = logging.getLogger(__name__)

UnlockCallback = Callable[[str, Achievement], None]


def validate_quantity(shares: object) -> int:
    """Order quantities are whole numbers of shares greater than zero."""
    if isinstance(shares, bool) or not isinstance(shares, int) or shares <= 0:
        raise InvalidQuantityError(shares)
    return shares


class LedgerService:
    """
    Executes orders and transfers against simulated accounts.

    Every mutation runs under the account's lock as one unit of work: the
    repositories only flush, and this service commits or rolls back. Business
    rule violations are raised before anything is written. Achievements are
    evaluated after each committed mutation; a failure there is logged and
    never undoes the mutation.
    """

    def __init__(
        self,
        session: Session,
        account_repo: AccountRepository,
        holding_store: HoldingStore,
        transaction_repo: TransactionRepository,
        transfer_repo: TransferRepository,
        catalog: InstrumentCatalog,
        game_score_repo: GameScoreRepository,
        achievement_evaluator: AchievementEvaluator,
        locks: AccountLockRegistry,
        risk_scorer: Optional[RiskScorer] = None,
        initial_cash: Decimal = Decimal("10000"),
        on_unlock: Optional[UnlockCallback] = None,
    ):
        self._session = session
        self._account_repo = account_repo
        self._holdings = holding_store
        self._transaction_repo = transaction_repo
        self._transfer_repo = transfer_repo
        self._catalog = catalog
        self._game_score_repo = game_score_repo
        self._achievements = achievement_evaluator
        self._locks = locks
        self._risk_scorer = risk_scorer or RiskScorer()
        self._initial_cash = to_decimal(initial_cash)
        self._on_unlock = on_unlock

    # =========================================================================
    # Accounts
    # =========================================================================

    def create_account(self, name: str) -> Account:
        """Open an account seeded with the configured starting cash."""
        name = (name or "").strip()
        if not name:
            raise ValidationError("Account name is required")
        if self._account_repo.get_by_name(name):
            raise ValidationError(f"Account with name '{name}' already exists")

        account = Account(
            account_id=str(uuid.uuid4()),
            name=name,
            cash_balance=self._initial_cash,
            savings_balance=ZERO,
            initial_cash=self._initial_cash,
            created_at_est=now_eastern(),
        )
        with self._unit_of_work("account"):
            try:
                created = self._account_repo.create(account)
            except IntegrityError as e:
                # Another writer took the name after the lookup above
                raise ValidationError(f"Account with name '{name}' already exists") from e
        logger.info("Created account %s (%s) with %s cash", created.account_id, name, self._initial_cash)
        return created

    def get_account(self, account_id: str) -> Account:
        """Get account by ID."""
        account = self._account_repo.get_by_id(account_id)
        if not account:
            raise NotFoundError("Account", account_id)
        return account

    def list_accounts(self) -> list[Account]:
        """List all accounts."""
        return self._account_repo.list_all()

    # =========================================================================
    # Orders
    # =========================================================================

    def buy(self, account_id: str, symbol: str, shares: int) -> Transaction:
        """
        Buy shares at the catalog's current price.

        Raises InvalidQuantityError, InstrumentUnavailableError or
        InsufficientFundsError without changing anything.
        """
        validate_quantity(shares)
        symbol = symbol.strip().upper()

        with self._locks.acquire(account_id):
            with self._unit_of_work(f"buy {symbol}"):
                account = self.get_account(account_id)
                price = self._catalog.get_price(symbol)
                total = price * shares
                if total > account.cash_balance:
                    logger.info(
                        "Rejected buy %d %s for %s: total %s exceeds cash %s",
                        shares, symbol, account_id, total, account.cash_balance,
                    )
                    raise InsufficientFundsError(str(total), str(account.cash_balance))

                self._account_repo.update_balances(
                    account_id, account.cash_balance - total, account.savings_balance
                )
                self._holdings.apply_lot(account_id, symbol, shares, price)
                txn = self._transaction_repo.append(
                    self._new_transaction(account_id, symbol, TransactionType.BUY, shares, price)
                )

        logger.info("BUY %d %s @ %s for account %s (total %s)", shares, symbol, price, account_id, total)
        self._after_mutation(account_id)
        return txn

    def sell(self, account_id: str, symbol: str, shares: int) -> Transaction:
        """
        Sell shares at the catalog's current price.

        The holding's avg_cost is left unchanged; a position sold down to zero
        is removed.
        """
        validate_quantity(shares)
        symbol = symbol.strip().upper()

        with self._locks.acquire(account_id):
            with self._unit_of_work(f"sell {symbol}"):
                account = self.get_account(account_id)
                holding = self._holdings.get(account_id, symbol)
                owned = holding.shares if holding else 0
                if shares > owned:
                    logger.info(
                        "Rejected sell %d %s for %s: only %d owned", shares, symbol, account_id, owned
                    )
                    raise InsufficientSharesError(symbol, str(shares), str(owned))
                price = self._catalog.get_price(symbol)
                total = price * shares

                self._account_repo.update_balances(
                    account_id, account.cash_balance + total, account.savings_balance
                )
                self._holdings.apply_lot(account_id, symbol, -shares, price)
                txn = self._transaction_repo.append(
                    self._new_transaction(account_id, symbol, TransactionType.SELL, shares, price)
                )

        logger.info("SELL %d %s @ %s for account %s (total %s)", shares, symbol, price, account_id, total)
        self._after_mutation(account_id)
        return txn

    # =========================================================================
    # Valuation
    # =========================================================================

    def snapshot(self, account_id: str) -> AccountSnapshot:
        """
        Value the account at current catalog prices.

        Read-only and lock-free. A holding without a catalog price is valued
        at cost and flagged price_available=False.
        """
        account = self.get_account(account_id)

        views: list[HoldingView] = []
        for holding in self._holdings.list_for_account(account_id):
            instrument = self._catalog.get(holding.symbol)
            invested = quantize_price(holding.cost_basis)
            if instrument is not None and instrument.is_active and instrument.current_price > ZERO:
                current_price = instrument.current_price
                current_value = current_price * holding.shares
                price_change = instrument.price_change
                price_change_percent = instrument.price_change_percent
                price_available = True
            else:
                current_price = holding.avg_cost
                current_value = invested
                price_change = ZERO
                price_change_percent = ZERO
                price_available = False

            gain_loss = current_value - invested
            views.append(
                HoldingView(
                    symbol=holding.symbol,
                    shares=holding.shares,
                    avg_cost=holding.avg_cost,
                    current_price=current_price,
                    current_value=current_value,
                    invested=invested,
                    gain_loss=gain_loss,
                    gain_loss_percent=percent(gain_loss, invested),
                    price_change=price_change,
                    price_change_percent=price_change_percent,
                    price_available=price_available,
                )
            )

        holdings_value = sum((v.current_value for v in views), ZERO)
        total_invested = sum((v.invested for v in views), ZERO)
        total_value = account.cash_balance + account.savings_balance + holdings_value
        total_gain_loss = total_value - account.initial_cash

        return AccountSnapshot(
            account_id=account_id,
            cash_balance=account.cash_balance,
            savings_balance=account.savings_balance,
            initial_cash=account.initial_cash,
            holdings=views,
            total_value=total_value,
            total_invested=total_invested,
            total_gain_loss=total_gain_loss,
            total_gain_loss_percent=percent(total_gain_loss, account.initial_cash),
            as_of=now_eastern(),
        )

    # =========================================================================
    # Transfers
    # =========================================================================

    def transfer(
        self,
        account_id: str,
        direction: TransferDirection,
        amount: Decimal,
        description: Optional[str] = None,
    ) -> FundTransfer:
        """Move money between the account's cash and savings balances."""
        try:
            amount = to_decimal(amount)
        except (InvalidOperation, TypeError, ValueError) as e:
            raise ValidationError(f"Invalid transfer amount: {amount!r}") from e
        if not amount.is_finite() or amount <= ZERO:
            raise ValidationError("Transfer amount must be greater than zero")
        if amount != quantize_price(amount):
            raise ValidationError("Transfer amount supports at most 4 decimal places")
        try:
            direction = TransferDirection(direction)
        except ValueError as e:
            raise ValidationError(f"Unknown transfer direction: {direction}") from e

        with self._locks.acquire(account_id):
            with self._unit_of_work("transfer"):
                account = self.get_account(account_id)
                if direction == TransferDirection.CASH_TO_SAVINGS:
                    source, available = "cash", account.cash_balance
                    cash = account.cash_balance - amount
                    savings = account.savings_balance + amount
                else:
                    source, available = "savings", account.savings_balance
                    cash = account.cash_balance + amount
                    savings = account.savings_balance - amount

                if amount > available:
                    logger.info(
                        "Rejected transfer of %s from %s for %s: available %s",
                        amount, source, account_id, available,
                    )
                    raise InsufficientBalanceError(source, str(amount), str(available))

                self._account_repo.update_balances(account_id, cash, savings)
                transfer = self._transfer_repo.append(
                    FundTransfer(
                        transfer_id=str(uuid.uuid4()),
                        account_id=account_id,
                        direction=direction,
                        amount=amount,
                        transfer_time_est=now_eastern(),
                        description=description,
                    )
                )

        logger.info("Transfer %s %s for account %s", direction.value, amount, account_id)
        self._after_mutation(account_id)
        return transfer

    # =========================================================================
    # Risk
    # =========================================================================

    def check_risk_alignment(self, account_id: str, instrument_risk: RiskProfile) -> bool:
        """
        Advisory check of an instrument's risk against the account's profile.

        Only a conservative investor buying an aggressive instrument is
        misaligned. Accounts without a profile are always aligned.
        """
        account = self.get_account(account_id)
        if account.risk_profile is None:
            return True
        return not (
            account.risk_profile == RiskProfile.CONSERVATIVE
            and RiskProfile(instrument_risk) == RiskProfile.AGGRESSIVE
        )

    def record_risk_assessment(self, account_id: str, answers: list[RiskAnswer]) -> RiskAssessment:
        """Score a questionnaire and store the resulting profile on the account."""
        assessment = self._risk_scorer.assess(answers)

        with self._locks.acquire(account_id):
            with self._unit_of_work("risk assessment"):
                self.get_account(account_id)
                self._account_repo.update_risk_profile(
                    account_id, assessment.risk_profile, assessment.total_score
                )

        logger.info(
            "Account %s assessed as %s (score %d)",
            account_id, assessment.risk_profile.value, assessment.total_score,
        )
        return assessment

    # =========================================================================
    # History
    # =========================================================================

    def list_transactions(
        self,
        account_id: str,
        limit: Optional[int] = 50,
        since: Optional[datetime] = None,
    ) -> list[Transaction]:
        """Order history, newest first."""
        self.get_account(account_id)
        return self._transaction_repo.list_by_account(
            account_id, limit=limit, since=since, newest_first=True
        )

    def list_transfers(self, account_id: str) -> list[FundTransfer]:
        """Transfer history, newest first."""
        self.get_account(account_id)
        return self._transfer_repo.list_by_account(account_id)

    # =========================================================================
    # Achievements
    # =========================================================================

    def record_game_score(
        self,
        account_id: str,
        game_type: GameType,
        points: int = 0,
        correct_predictions: int = 0,
    ) -> GameScore:
        """Add a game result to the account's counters and re-evaluate achievements."""
        for label, value in (("points", points), ("correct_predictions", correct_predictions)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValidationError(f"{label} must be a non-negative integer")
        try:
            game_type = GameType(game_type)
        except ValueError as e:
            raise ValidationError(f"Unknown game type: {game_type}") from e

        with self._locks.acquire(account_id):
            with self._unit_of_work("game score"):
                self.get_account(account_id)
                current = self._game_score_repo.get(account_id, game_type) or GameScore(
                    account_id=account_id, game_type=game_type
                )
                current.score += points
                current.correct_predictions += correct_predictions
                current.total_attempts += 1
                current.updated_at_est = now_eastern()
                saved = self._game_score_repo.upsert(current)

        logger.info(
            "Recorded %s result for account %s: +%d points, +%d correct",
            game_type.value, account_id, points, correct_predictions,
        )
        self._after_mutation(account_id)
        return saved

    def counters(self, account_id: str) -> AchievementCounters:
        """Collect the non-snapshot inputs of the achievement rules."""
        scores = {s.game_type: s for s in self._game_score_repo.list_by_account(account_id)}
        quiz = scores.get(GameType.QUIZ)
        predictions = scores.get(GameType.MARKET_PREDICTION)
        return AchievementCounters(
            transaction_count=self._transaction_repo.count_by_account(account_id),
            quiz_score=quiz.score if quiz else 0,
            correct_predictions=predictions.correct_predictions if predictions else 0,
        )

    def evaluate_achievements(self, account_id: str) -> AchievementReport:
        """Evaluate the rules against the current state and record new unlocks."""
        report = self._achievements.evaluate(self.snapshot(account_id), self.counters(account_id))
        for achievement in report.newly_unlocked:
            if self._on_unlock is not None:
                self._on_unlock(account_id, achievement)
        return report

    # =========================================================================
    # Internals
    # =========================================================================

    @contextmanager
    def _unit_of_work(self, operation: str) -> Iterator[None]:
        """Commit the block's writes, or roll all of them back."""
        try:
            yield
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error("Persistence failure during %s: %s", operation, e)
            raise PersistenceFailureError(operation, str(e)) from e
        except Exception:
            self._session.rollback()
            raise

    def _after_mutation(self, account_id: str) -> Optional[AchievementReport]:
        try:
            return self.evaluate_achievements(account_id)
        except Exception:
            self._session.rollback()
            logger.exception("Achievement evaluation failed for account %s", account_id)
            return None

    @staticmethod
    def _new_transaction(
        account_id: str,
        symbol: str,
        txn_type: TransactionType,
        shares: int,
        price: Decimal,
    ) -> Transaction:
        return Transaction(
            txn_id=str(uuid.uuid4()),
            account_id=account_id,
            symbol=symbol,
            txn_type=txn_type,
            shares=shares,
            price=price,
            total=price * shares,
            txn_time_est=now_eastern(),
        )
