"""Domain models for paisa-plan.

All budget and expense data structures are defined here using Pydantic v2
for validation. Currency values are always Decimal.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Annotated
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


DEFAULT_ICON = "\U0001f4e6"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------


class TipKind(str, Enum):
    """Severity of an advisory tip."""

    WARNING = "warning"
    INFO = "info"
    SUCCESS = "success"


class StorageBackend(str, Enum):
    """Where a workspace keeps its data.

    JSON: Single key-value document on local disk.
    SQLITE: Relational tables (expenses, categories, budgets, credits).
    """

    JSON = "json"
    SQLITE = "sqlite"


class AlertWindow(str, Enum):
    """Window used for the spending alert raised when an expense is added."""

    WEEK = "week"
    MONTH = "month"


class TransactionKind(str, Enum):
    EXPENSE = "expense"
    CREDIT = "credit"


class TransactionFilter(str, Enum):
    ALL = "all"
    EXPENSES = "expenses"
    CREDITS = "credits"


class TransactionSort(str, Enum):
    DATE = "date"
    AMOUNT = "amount"


# -----------------------------------------------------------------------------
# Records
# -----------------------------------------------------------------------------


class Category(BaseModel):
    """A user-defined spending bucket.

    Expenses refer to a category either by id or by display name, so
    `matches` accepts both.
    """

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    color: str = "category-other"
    icon: str = DEFAULT_ICON

    def matches(self, reference: str) -> bool:
        """True if an expense's category reference points at this category."""
        return reference == self.id or reference == self.name


class Expense(BaseModel):
    """A single recorded outflow.

    Attributes:
        id: Unique identifier (auto-generated UUID).
        title: Free-text label.
        amount: Positive amount in the workspace currency.
        category: Category id or name.
        date: When the spend occurred (may differ from creation time).
        description: Optional free text.
    """

    id: UUID = Field(default_factory=uuid4)
    title: str = Field(min_length=1)
    amount: Annotated[Decimal, Field(gt=0)]
    category: str = Field(min_length=1)
    date: datetime
    description: str | None = None


class Credit(BaseModel):
    """An ad-hoc addition to the budget ceiling (not an expense)."""

    id: UUID = Field(default_factory=uuid4)
    amount: Annotated[Decimal, Field(gt=0)]
    date: datetime = Field(default_factory=_utcnow)
    description: str | None = None


class Budget(BaseModel):
    """The single active spending plan.

    total_amount already includes every credit added after creation;
    credits keeps their running sum for display. Positivity of
    total_amount and duration is checked by the engine, which raises
    InvalidBudgetConfiguration rather than rejecting the record on load.
    """

    total_amount: Decimal
    duration: int  # days
    start_date: datetime
    credits: Decimal = Decimal(0)


DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category(id="food", name="Food & Dining", color="category-food", icon="\U0001f355"),
    Category(id="transport", name="Transport", color="category-transport", icon="\U0001f697"),
    Category(
        id="entertainment",
        name="Entertainment",
        color="category-entertainment",
        icon="\U0001f3ac",
    ),
    Category(id="shopping", name="Shopping", color="category-shopping", icon="\U0001f6cd\ufe0f"),
    Category(id="health", name="Health", color="category-health", icon="\u2695\ufe0f"),
    Category(id="bills", name="Bills & Utilities", color="category-bills", icon="\U0001f4a1"),
    Category(id="other", name="Other", color="category-other", icon="\U0001f4e6"),
)


class Snapshot(BaseModel):
    """Everything a repository loads and saves in one go.

    The engine only ever reads a snapshot; the tracker service builds a
    new one for every write.
    """

    expenses: list[Expense] = Field(default_factory=list)
    categories: list[Category] = Field(default_factory=list)
    budget: Budget | None = None
    credits: list[Credit] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "Snapshot":
        """Fresh snapshot seeded with the default categories."""
        return cls(categories=[c.model_copy() for c in DEFAULT_CATEGORIES])

    @property
    def total_expenses(self) -> Decimal:
        return sum((e.amount for e in self.expenses), Decimal(0))

    def find_category(self, reference: str) -> Category | None:
        for category in self.categories:
            if category.matches(reference):
                return category
        return None


# -----------------------------------------------------------------------------
# Workspace Configuration
# -----------------------------------------------------------------------------


class WorkspaceConfig(BaseModel):
    """Configuration for a paisa-plan workspace.

    Stored as paisa.json in the workspace directory.
    """

    name: str = Field(min_length=1)
    currency: str = Field(default="INR", min_length=3, max_length=3, pattern=r"^[A-Z]{3}$")
    storage: StorageBackend = StorageBackend.JSON
    data_file: str | None = None  # Defaults depend on storage backend
    alert_window: AlertWindow = AlertWindow.WEEK

    @property
    def resolved_data_file(self) -> str:
        if self.data_file:
            return self.data_file
        if self.storage == StorageBackend.SQLITE:
            return "paisa.db"
        return "paisa-data.json"


# -----------------------------------------------------------------------------
# Engine Output Models
# -----------------------------------------------------------------------------


class DerivedBudgetStatus(BaseModel):
    """Budget figures derived at evaluation time. Never persisted."""

    remaining: Decimal
    percent_used: Decimal
    days_elapsed: int
    days_remaining: int
    daily_budget: Decimal
    expected_spent: Decimal
    is_over_budget: bool
    daily_remaining: Decimal


class Tip(BaseModel):
    """Advisory message for the presentation layer."""

    kind: TipKind
    title: str
    message: str


class BudgetEvaluation(BaseModel):
    """Result of evaluating a budget.

    status is None when no budget is configured; tips is then empty.
    """

    status: DerivedBudgetStatus | None = None
    tips: list[Tip] = Field(default_factory=list)


class CategoryTotal(BaseModel):
    """Spending for one category."""

    category: Category
    total: Decimal
    count: int


class MonthlyPoint(BaseModel):
    """One bar of the monthly spending trend."""

    year: int
    month: int
    label: str  # "Jan 2024"
    total: Decimal


class DashboardStats(BaseModel):
    """Headline numbers for the dashboard."""

    total_expenses: Decimal = Decimal(0)
    current_balance: Decimal = Decimal(0)  # 0 without a budget
    monthly_total: Decimal = Decimal(0)
    monthly_count: int = 0
    weekly_total: Decimal = Decimal(0)
    weekly_count: int = 0


class Transaction(BaseModel):
    """Unified row over expenses and credits for the transaction list."""

    id: str
    title: str
    amount: Decimal
    kind: TransactionKind
    category: str | None = None
    date: datetime
    description: str | None = None
