"""
Billing cycle due calculation.

A student's fee for a month becomes payable on the admission day-of-month of
the following month. These helpers walk the months between admission and a
reference date and work out which of them are due and still unpaid.

Nothing in here touches the database: payments are read through their
``month_paid_for`` attribute only.
"""
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from functools import reduce
from typing import Iterable, List, NamedTuple, Optional, Tuple

from dateutil.relativedelta import relativedelta

MONTH_ID_FORMAT = '%Y-%m'
MONTH_LABEL_FORMAT = '%B %Y'
PAYABLE_MONTHS_AHEAD = 24

FEE_STATUS_INFO = 'info'
FEE_STATUS_SUCCESS = 'success'
FEE_STATUS_WARNING = 'warning'
FEE_STATUS_DESTRUCTIVE = 'destructive'
FEE_STATUS_DEFAULT = 'default'

# Three or more unpaid months is flagged as destructive.
DESTRUCTIVE_THRESHOLD = 3


class InvalidDate(ValueError):
    """Raised when an admission or reference date is not a usable calendar date."""

    def __init__(self, field, value):
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field}: {value!r}")


@dataclass(frozen=True)
class PaymentRecord:
    month_paid_for: str
    amount_paid: Decimal = Decimal('0')
    date_of_payment: Optional[date] = None


@dataclass(frozen=True)
class DueInfo:
    due_months: Tuple[str, ...]
    due_months_count: int
    total_due_amount: Decimal
    fee_status_label: str
    fee_status_type: str
    payment_cycle_has_started: bool = False
    is_error: bool = False


class MonthOption(NamedTuple):
    month_id: str
    display_label: str


class CycleFold(NamedTuple):
    due_months: Tuple[str, ...]
    cycle_started: bool


def to_date(value, field='date'):
    """Coerce a date, datetime or ISO 'YYYY-MM-DD' string into a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip(), '%Y-%m-%d').date()
        except ValueError:
            raise InvalidDate(field, value) from None
    raise InvalidDate(field, value)


def month_start(value: date) -> date:
    return value.replace(day=1)


def month_id(value: date) -> str:
    return value.strftime(MONTH_ID_FORMAT)


def parse_month_id(text: str) -> date:
    """Return the first day of the month named by a 'YYYY-MM' identifier."""
    if not isinstance(text, str) or len(text.strip()) != 7:
        raise ValueError(f"Invalid month identifier: {text!r}")
    return datetime.strptime(text.strip(), MONTH_ID_FORMAT).date()


def format_month_id(text) -> str:
    try:
        return parse_month_id(text).strftime(MONTH_LABEL_FORMAT)
    except ValueError:
        return 'Invalid Month'


def paid_months(payments) -> List[str]:
    return sorted(p.month_paid_for for p in payments if p.month_paid_for)


def iter_month_starts(first: date, last: date):
    """Yield the first day of every month from ``first`` through ``last`` inclusive."""
    current = month_start(first)
    last = month_start(last)
    while current <= last:
        yield current
        current = current + relativedelta(months=1)


def billing_due_date(cycle_month: date, billing_day: int) -> date:
    """
    Due date for the fee of ``cycle_month``: ``billing_day`` of that month,
    shifted forward one month.

    A billing day past the end of the cycle month rolls over into the next
    month first (Feb 31st is Mar 2nd in a leap year, so the February fee is
    due Apr 2nd). The one month shift itself clamps to the length of the
    target month (Jan 31st moves to Feb 29th).
    """
    anchor = month_start(cycle_month) + timedelta(days=billing_day - 1)
    return anchor + relativedelta(months=1)


def _fold_cycles(admission: date, reference: date, paid: frozenset) -> CycleFold:
    billing_day = admission.day

    def step(acc, cycle_month):
        if reference < billing_due_date(cycle_month, billing_day):
            return acc
        key = month_id(cycle_month)
        if key in paid:
            return CycleFold(acc.due_months, True)
        return CycleFold(acc.due_months + (key,), True)

    return reduce(step, iter_month_starts(admission, reference), CycleFold((), False))


def classify_dues(due_months_count: int, cycle_started: bool) -> Tuple[str, str]:
    """Map an unpaid month count to a status label and badge type."""
    if due_months_count == 0:
        if cycle_started:
            return 'Paid', FEE_STATUS_SUCCESS
        return 'Not Due Yet', FEE_STATUS_INFO
    if due_months_count == 1:
        return '1 Month Due', FEE_STATUS_WARNING
    if due_months_count < DESTRUCTIVE_THRESHOLD:
        return f'{due_months_count} Months Due', FEE_STATUS_WARNING
    return f'{due_months_count} Months Due', FEE_STATUS_DESTRUCTIVE


def compute_due(admission_date, payments: Iterable, monthly_fee, reference_date) -> DueInfo:
    """
    Work out which billing cycles are due and unpaid as of ``reference_date``.

    Raises InvalidDate if either date cannot be read as a calendar date.
    The fee is multiplied as given; it is not validated here.
    """
    admission = to_date(admission_date, 'admission date')
    reference = to_date(reference_date, 'reference date')

    fold = _fold_cycles(admission, reference, frozenset(paid_months(payments)))
    due_months = tuple(sorted(set(fold.due_months)))
    count = len(due_months)
    label, status_type = classify_dues(count, fold.cycle_started)

    return DueInfo(
        due_months=due_months,
        due_months_count=count,
        total_due_amount=Decimal(count) * Decimal(str(monthly_fee)),
        fee_status_label=label,
        fee_status_type=status_type,
        payment_cycle_has_started=fold.cycle_started,
    )


def error_due_info(label='Error') -> DueInfo:
    return DueInfo(
        due_months=(),
        due_months_count=0,
        total_due_amount=Decimal('0'),
        fee_status_label=label,
        fee_status_type=FEE_STATUS_DEFAULT,
        is_error=True,
    )


def compute_due_or_error(admission_date, payments, monthly_fee, reference_date) -> DueInfo:
    """Like compute_due, but returns a zeroed result flagged ``is_error`` on bad dates."""
    try:
        return compute_due(admission_date, payments, monthly_fee, reference_date)
    except InvalidDate as e:
        if e.field == 'admission date':
            return error_due_info('Invalid Admission Date')
        return error_due_info('Invalid Reference Date')


def enumerate_payable_months(admission_date, reference_date, months_ahead=PAYABLE_MONTHS_AHEAD):
    """
    List the months a payment can be credited against, from the admission
    month up to ``months_ahead`` months past the reference month.

    Returns an empty list if either date is invalid.
    """
    try:
        admission = to_date(admission_date, 'admission date')
        reference = to_date(reference_date, 'reference date')
    except InvalidDate:
        return []

    last = month_start(reference) + relativedelta(months=months_ahead)
    return [
        MonthOption(month_id(m), m.strftime(MONTH_LABEL_FORMAT))
        for m in iter_month_starts(admission, last)
    ]
