from datetime import date
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator, RegexValidator
from django.db import models, transaction
from django.db.models import Max, Sum
from django.utils import timezone

from authentication.models import User
from .dues import compute_due_or_error, enumerate_payable_months

def student_profile_photo_path(instance, filename):
    return f"student_profiles/{instance.owner_id}/{filename}"


class StudentQuerySet(models.QuerySet):
    def owned_by(self, user):
        return self.filter(owner=user)

    def next_sort_order(self, user):
        """Sort order for a student appended to the end of ``user``'s roster"""
        current = self.owned_by(user).aggregate(m=Max('sort_order'))['m']
        return 0 if current is None else current + 1

    def reorder(self, user, ordered_ids):
        """
        Rewrite sort_order to 0..n-1 following ``ordered_ids``.
        The ids must be exactly ``user``'s whole roster; otherwise nothing is written.
        """
        ordered_ids = [int(pk) for pk in ordered_ids]
        if len(set(ordered_ids)) != len(ordered_ids):
            raise ValueError('Duplicate student ids in ordering.')

        students = {s.id: s for s in self.owned_by(user)}
        missing = [pk for pk in ordered_ids if pk not in students]
        if missing:
            raise self.model.DoesNotExist(f"Students not found: {missing}")
        if len(ordered_ids) != len(students):
            raise ValueError('Ordering must list every student in the roster.')

        changed = []
        for index, pk in enumerate(ordered_ids):
            student = students[pk]
            if student.sort_order != index:
                student.sort_order = index
                changed.append(student)

        with transaction.atomic():
            self.model.objects.bulk_update(changed, ['sort_order'])
        return len(changed)

    def normalize_sort_order(self, user):
        """Renumber a roster whose sort orders are missing or collide, keeping relative order."""
        students = list(self.owned_by(user).order_by(
            models.F('sort_order').asc(nulls_last=True), 'created_at', 'id'
        ))
        changed = []
        for index, student in enumerate(students):
            if student.sort_order != index:
                student.sort_order = index
                changed.append(student)
        with transaction.atomic():
            self.model.objects.bulk_update(changed, ['sort_order'])
        return len(changed)


class Student(models.Model):
    owner = models.ForeignKey(User, on_delete=models.CASCADE, related_name='students')
    full_name = models.CharField(max_length=100)
    father_name = models.CharField(max_length=100)
    class_name = models.CharField(max_length=50)
    mobile_number = models.CharField(max_length=15)
    admission_date = models.DateField()
    monthly_fee = models.DecimalField(
        max_digits=10, decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
    )
    profile_photo = models.ImageField(upload_to=student_profile_photo_path, blank=True, null=True)
    student_notes = models.TextField(blank=True, default='')
    sort_order = models.PositiveIntegerField(null=True, blank=True, db_index=True)
    created_at = models.DateTimeField(default=timezone.now)

    objects = StudentQuerySet.as_manager()

    class Meta:
        ordering = ('sort_order', 'id')

    @property
    def effective_monthly_fee(self):
        """The stored fee, or the configured default when none is usable"""
        if self.monthly_fee is not None and self.monthly_fee > 0:
            return self.monthly_fee
        return settings.DEFAULT_MONTHLY_FEE

    def due_info(self, reference_date=None):
        if reference_date is None:
            reference_date = date.today()
        return compute_due_or_error(
            self.admission_date,
            self.payments.all(),
            self.effective_monthly_fee,
            reference_date,
        )

    def payable_months(self, reference_date=None):
        if reference_date is None:
            reference_date = date.today()
        return enumerate_payable_months(
            self.admission_date, reference_date, settings.PAYABLE_MONTHS_AHEAD
        )

    @property
    def total_paid(self):
        """Total amount received from this student across all payments"""
        return self.payments.aggregate(s=Sum('amount_paid'))['s'] or Decimal('0')

    @property
    def avatar_initial(self):
        return (self.full_name or 'S')[:1].upper()

    def __str__(self):
        return f"{self.full_name} ({self.class_name})"


class Payment(models.Model):
    METHOD_CHOICES = [
        ('Cash', 'Cash'),
        ('Online', 'Online'),
        ('Cheque', 'Cheque'),
        ('Other', 'Other'),
    ]

    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name='payments')
    date_of_payment = models.DateField()
    payment_method = models.CharField(max_length=10, choices=METHOD_CHOICES, default='Cash')
    month_paid_for = models.CharField(
        max_length=7,
        validators=[RegexValidator(r'^\d{4}-(0[1-9]|1[0-2])$', 'Month must be in YYYY-MM format.')],
    )
    amount_paid = models.DecimalField(
        max_digits=10, decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
    )
    notes = models.TextField(blank=True, default='')
    recorded_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='payments')
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ('-date_of_payment', '-id')

    def __str__(self):
        return f"{self.student.full_name} - {self.month_paid_for}: {self.amount_paid}"
