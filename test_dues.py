from datetime import date, datetime
from decimal import Decimal

import pytest

from Students.dues import (
    DueInfo,
    InvalidDate,
    MonthOption,
    PaymentRecord,
    billing_due_date,
    classify_dues,
    compute_due,
    compute_due_or_error,
    enumerate_payable_months,
    format_month_id,
    paid_months,
    parse_month_id,
)


def paid(*months):
    return [PaymentRecord(month_paid_for=m, amount_paid=Decimal('1000')) for m in months]


# Scenarios

def test_reference_before_first_due_date_is_not_due_yet():
    info = compute_due(date(2024, 1, 15), [], Decimal('1000'), date(2024, 2, 10))
    assert info.due_months == ()
    assert info.due_months_count == 0
    assert info.total_due_amount == Decimal('0')
    assert info.fee_status_label == 'Not Due Yet'
    assert info.fee_status_type == 'info'
    assert info.payment_cycle_has_started is False
    assert info.is_error is False


def test_first_cycle_due_after_anniversary_day():
    info = compute_due(date(2024, 1, 15), [], Decimal('1000'), date(2024, 2, 20))
    assert info.due_months == ('2024-01',)
    assert info.total_due_amount == Decimal('1000')
    assert info.fee_status_label == '1 Month Due'
    assert info.fee_status_type == 'warning'


def test_paid_month_gives_paid_status():
    info = compute_due(date(2024, 1, 15), paid('2024-01'), Decimal('1000'), date(2024, 2, 20))
    assert info.due_months_count == 0
    assert info.payment_cycle_has_started is True
    assert info.fee_status_label == 'Paid'
    assert info.fee_status_type == 'success'


def test_admitted_on_31st_clamps_due_date_to_end_of_february():
    assert billing_due_date(date(2024, 1, 1), 31) == date(2024, 2, 29)

    info = compute_due(date(2024, 1, 31), [], Decimal('1000'), date(2024, 3, 5))
    assert info.due_months == ('2024-01',)


def test_due_on_clamped_date_itself():
    before = compute_due(date(2024, 1, 31), [], Decimal('1000'), date(2024, 2, 28))
    on = compute_due(date(2024, 1, 31), [], Decimal('1000'), date(2024, 2, 29))
    assert before.fee_status_label == 'Not Due Yet'
    assert on.due_months == ('2024-01',)


def test_four_unpaid_months_is_destructive():
    info = compute_due(date(2024, 1, 10), [], Decimal('1500'), date(2024, 5, 15))
    assert info.due_months == ('2024-01', '2024-02', '2024-03', '2024-04')
    assert info.total_due_amount == Decimal('6000')
    assert info.fee_status_label == '4 Months Due'
    assert info.fee_status_type == 'destructive'


# Month length boundaries for the due date

@pytest.mark.parametrize('cycle_month, billing_day, expected', [
    # shift into a shorter month clamps
    (date(2023, 1, 1), 31, date(2023, 2, 28)),
    (date(2023, 1, 1), 29, date(2023, 2, 28)),
    (date(2024, 1, 1), 30, date(2024, 2, 29)),
    (date(2024, 1, 1), 29, date(2024, 2, 29)),
    (date(2024, 1, 1), 28, date(2024, 2, 28)),
    (date(2024, 3, 1), 31, date(2024, 4, 30)),
    (date(2024, 3, 1), 30, date(2024, 4, 30)),
    (date(2024, 8, 1), 31, date(2024, 9, 30)),
    (date(2024, 12, 1), 31, date(2025, 1, 31)),
    (date(2024, 2, 1), 15, date(2024, 3, 15)),
    # billing day past the end of the cycle month rolls over first
    (date(2024, 2, 1), 31, date(2024, 4, 2)),
    (date(2023, 2, 1), 31, date(2023, 4, 3)),
    (date(2024, 4, 1), 31, date(2024, 6, 1)),
    (date(2024, 6, 1), 31, date(2024, 8, 1)),
    (date(2024, 9, 1), 31, date(2024, 11, 1)),
    (date(2024, 11, 1), 31, date(2025, 1, 1)),
    (date(2024, 2, 1), 30, date(2024, 4, 1)),
    (date(2024, 2, 1), 29, date(2024, 3, 29)),
    (date(2023, 2, 1), 30, date(2023, 4, 2)),
    (date(2023, 2, 1), 29, date(2023, 4, 1)),
])
def test_billing_due_date_month_lengths(cycle_month, billing_day, expected):
    assert billing_due_date(cycle_month, billing_day) == expected


def test_february_cycle_for_31st_admission_due_in_april():
    payments = paid('2024-01')
    before = compute_due(date(2024, 1, 31), payments, Decimal('1000'), date(2024, 4, 1))
    on = compute_due(date(2024, 1, 31), payments, Decimal('1000'), date(2024, 4, 2))
    assert before.due_months == ()
    assert before.fee_status_label == 'Paid'
    assert on.due_months == ('2024-02',)


def test_april_cycle_for_31st_admission_due_first_of_june():
    payments = paid('2024-01', '2024-02', '2024-03')
    assert compute_due(date(2024, 1, 31), payments, 1000, date(2024, 5, 31)).fee_status_label == 'Paid'
    assert compute_due(date(2024, 1, 31), payments, 1000, date(2024, 6, 1)).due_months == ('2024-04',)


def test_admitted_on_31st_thirty_day_month_boundary():
    # March cycle is due on April 30th
    payments = paid('2024-01', '2024-02')
    assert compute_due(date(2024, 1, 31), payments, 1000, date(2024, 4, 29)).fee_status_label == 'Paid'
    assert compute_due(date(2024, 1, 31), payments, 1000, date(2024, 4, 30)).due_months == ('2024-03',)


def test_year_rollover():
    info = compute_due(date(2023, 11, 5), [], Decimal('100'), date(2024, 1, 5))
    assert info.due_months == ('2023-11', '2023-12')


# Classification

@pytest.mark.parametrize('count, started, label, status_type', [
    (0, False, 'Not Due Yet', 'info'),
    (0, True, 'Paid', 'success'),
    (1, True, '1 Month Due', 'warning'),
    (2, True, '2 Months Due', 'warning'),
    (3, True, '3 Months Due', 'destructive'),
    (12, True, '12 Months Due', 'destructive'),
])
def test_classify_dues(count, started, label, status_type):
    assert classify_dues(count, started) == (label, status_type)


# Properties

def test_count_and_total_are_consistent():
    info = compute_due(date(2022, 6, 20), paid('2022-08', '2023-01'), Decimal('750.50'), date(2023, 6, 1))
    assert info.due_months_count == len(info.due_months)
    assert info.total_due_amount == info.due_months_count * Decimal('750.50')


def test_due_months_strictly_ascending():
    info = compute_due(date(2021, 3, 3), paid('2021-05', '2022-02', '2022-02'), 900, date(2023, 3, 3))
    assert list(info.due_months) == sorted(set(info.due_months))
    assert '2021-05' not in info.due_months
    assert '2022-02' not in info.due_months


def test_idempotent():
    args = (date(2024, 1, 15), paid('2024-02'), Decimal('1000'), date(2024, 6, 1))
    assert compute_due(*args) == compute_due(*args)


def test_matching_uses_month_identifier_only():
    payment = PaymentRecord(month_paid_for='2024-03', amount_paid=Decimal('1'), date_of_payment=date(2030, 1, 1))
    info = compute_due(date(2024, 3, 1), [payment], Decimal('1000'), date(2024, 4, 2))
    assert info.fee_status_label == 'Paid'


def test_payments_for_other_months_do_not_count():
    info = compute_due(date(2024, 1, 15), paid('2023-12', '2024-05'), 1000, date(2024, 2, 20))
    assert info.due_months == ('2024-01',)


def test_admission_after_reference():
    info = compute_due(date(2024, 5, 10), [], 1000, date(2024, 3, 1))
    assert info.fee_status_label == 'Not Due Yet'


def test_accepts_datetime_and_iso_strings():
    info = compute_due('2024-01-15', [], 1000, datetime(2024, 2, 15, 9, 30))
    assert info.due_months == ('2024-01',)


# Invalid dates

@pytest.mark.parametrize('bad', [None, '2024-02-30', 'yesterday', 20240101])
def test_invalid_admission_date_raises(bad):
    with pytest.raises(InvalidDate) as excinfo:
        compute_due(bad, [], 1000, date(2024, 1, 1))
    assert excinfo.value.field == 'admission date'


def test_invalid_reference_date_raises():
    with pytest.raises(InvalidDate) as excinfo:
        compute_due(date(2024, 1, 1), [], 1000, '2024-13-01')
    assert excinfo.value.field == 'reference date'


def test_degraded_result_is_distinguishable_from_zero_dues():
    degraded = compute_due_or_error(None, [], 1000, date(2024, 1, 1))
    genuine = compute_due_or_error(date(2024, 1, 15), [], 1000, date(2024, 1, 20))

    assert degraded == DueInfo((), 0, Decimal('0'), 'Invalid Admission Date', 'default', False, True)
    assert genuine.due_months_count == degraded.due_months_count == 0
    assert genuine.is_error is False
    assert compute_due_or_error(date(2024, 1, 1), [], 1000, 'nope').fee_status_label == 'Invalid Reference Date'


# Payable months

def test_enumerate_payable_months_range():
    options = enumerate_payable_months(date(2024, 1, 15), date(2024, 3, 10))
    assert len(options) == 27
    assert options[0] == MonthOption('2024-01', 'January 2024')
    assert options[-1] == MonthOption('2026-03', 'March 2026')
    assert [o.month_id for o in options] == sorted(o.month_id for o in options)


def test_enumerate_payable_months_custom_horizon():
    options = enumerate_payable_months(date(2024, 11, 30), date(2025, 1, 1), months_ahead=0)
    assert [o.month_id for o in options] == ['2024-11', '2024-12', '2025-01']


@pytest.mark.parametrize('admission, reference', [
    (None, date(2024, 1, 1)),
    (date(2024, 1, 1), '2024-02-31'),
])
def test_enumerate_payable_months_invalid_dates(admission, reference):
    assert enumerate_payable_months(admission, reference) == []


# Month identifiers

def test_month_identifier_helpers():
    assert parse_month_id('2024-03') == date(2024, 3, 1)
    assert format_month_id('2024-03') == 'March 2024'
    assert format_month_id('2024-3') == 'Invalid Month'
    assert format_month_id(None) == 'Invalid Month'
    with pytest.raises(ValueError):
        parse_month_id('2024-00')


def test_paid_months_sorted():
    assert paid_months(paid('2024-03', '2023-12', '2024-01')) == ['2023-12', '2024-01', '2024-03']
