import logging
from datetime import date
from decimal import Decimal

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from authentication.models import User
from Students.dues import InvalidDate, compute_due, to_date
from Students.models import Student

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Print each student\'s fee status and outstanding amount as of a date'

    def add_arguments(self, parser):
        parser.add_argument(
            '--as-of',
            default=None,
            help='Reference date in YYYY-MM-DD format (default: today)',
        )
        parser.add_argument(
            '--owner',
            default=None,
            help='Only report students managed by the user with this email',
        )
        parser.add_argument(
            '--only-due',
            action='store_true',
            help='Skip students with nothing outstanding',
        )

    def handle(self, *args, **options):
        try:
            reference_date = to_date(options['as_of'], 'reference date') if options['as_of'] else date.today()
        except InvalidDate as e:
            raise CommandError(str(e))

        students = Student.objects.select_related('owner').prefetch_related('payments').order_by('owner_id', 'sort_order', 'id')
        if options['owner']:
            try:
                owner = User.objects.get(email__iexact=options['owner'])
            except User.DoesNotExist:
                raise CommandError(f"No user with email {options['owner']}")
            students = students.filter(owner=owner)

        currency = settings.CURRENCY_SYMBOL
        self.stdout.write(f"Fee dues as of {reference_date}")

        reported = 0
        failed = 0
        grand_total = Decimal('0')
        for student in students:
            try:
                info = compute_due(
                    student.admission_date,
                    student.payments.all(),
                    student.effective_monthly_fee,
                    reference_date,
                )
            except InvalidDate as e:
                failed += 1
                logger.warning("Skipping student %s: %s", student.id, e)
                self.stdout.write(self.style.ERROR(f"{student.full_name}: {e}"))
                continue

            if options['only_due'] and info.due_months_count == 0:
                continue

            line = (
                f"{student.full_name} ({student.class_name}) - {info.fee_status_label} - "
                f"{currency} {info.total_due_amount:,.2f}"
            )
            if info.due_months:
                line += f" [{', '.join(info.due_months)}]"

            if info.fee_status_type == 'destructive':
                self.stdout.write(self.style.ERROR(line))
            elif info.fee_status_type == 'warning':
                self.stdout.write(self.style.WARNING(line))
            else:
                self.stdout.write(line)

            reported += 1
            grand_total += info.total_due_amount

        self.stdout.write(
            self.style.SUCCESS(
                f"\nReported {reported} students, total outstanding {currency} {grand_total:,.2f}."
            )
        )
        if failed:
            self.stdout.write(self.style.WARNING(f"{failed} students skipped due to invalid dates."))
