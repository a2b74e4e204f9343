from datetime import datetime, timezone

import pytest

from src.platform.exception.exceptions import DomainError
from src.service.reading_room.domain.value_object import EnrollmentTerms, PlanDuration


pytestmark = pytest.mark.unit


class TestPlanDuration:
    def test_days_add_exact_days(self):
        start = datetime(2025, 1, 1, tzinfo=timezone.utc)

        end = PlanDuration.parse('30 days').end_date(start)

        assert end == datetime(2025, 1, 31, tzinfo=timezone.utc)

    def test_month_from_jan_31_clamps_to_end_of_february(self):
        assert PlanDuration.parse('1 month').end_date(
            datetime(2025, 1, 31, tzinfo=timezone.utc)
        ) == datetime(2025, 2, 28, tzinfo=timezone.utc)
        # Leap year
        assert PlanDuration.parse('1 month').end_date(
            datetime(2024, 1, 31, tzinfo=timezone.utc)
        ) == datetime(2024, 2, 29, tzinfo=timezone.utc)

    def test_months_cross_year_boundary(self):
        end = PlanDuration.parse('3 months').end_date(datetime(2024, 11, 15, tzinfo=timezone.utc))

        assert end == datetime(2025, 2, 15, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        'text,expected',
        [('1 day', '1 day'), ('30 Days', '30 days'), (' 2 month ', '2 months')],
    )
    def test_parse_normalizes_text(self, text, expected):
        assert str(PlanDuration.parse(text)) == expected

    @pytest.mark.parametrize('text', ['', 'a month', '0 days', '3 weeks', '-1 days'])
    def test_invalid_duration_is_rejected(self, text):
        with pytest.raises(DomainError):
            PlanDuration.parse(text)


class TestEnrollmentTerms:
    def test_naive_dates_are_treated_as_utc(self):
        terms = EnrollmentTerms.build(
            start_date=datetime(2025, 1, 1),
            duration='30 days',
            amount=1200,
            payment_method='cash',
            paid_at=datetime(2025, 1, 1, 10),
        )

        assert terms.start_date.tzinfo is timezone.utc
        assert terms.paid_at.tzinfo is timezone.utc
        assert terms.end_date == datetime(2025, 1, 31, tzinfo=timezone.utc)

    def test_unknown_payment_method_is_rejected(self):
        with pytest.raises(DomainError):
            EnrollmentTerms.build(
                start_date=datetime(2025, 1, 1, tzinfo=timezone.utc),
                duration='30 days',
                amount=1200,
                payment_method='cheque',
                paid_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
            )
