import json
import logging
import os
from datetime import date
from decimal import Decimal

from django.conf import settings
from django.contrib import messages
from django.db.models import Q, Sum
from django.http import HttpResponse, JsonResponse
from django.shortcuts import render, redirect
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas
from reportlab.platypus import Table, TableStyle

from authentication.views import session_login_required
from Students import models as student_models
from .dues import format_month_id
from .forms import StudentForm, PaymentForm

logger = logging.getLogger(__name__)


def _reference_date(request):
    """The 'as of' date for due calculations: ?as_of=YYYY-MM-DD or today"""
    return request.GET.get('as_of') or date.today()


def _due_info(student, reference_date):
    info = student.due_info(reference_date)
    if info.is_error:
        logger.warning("Could not compute dues for student %s: %s", student.id, info.fee_status_label)
    return info


def _get_owned_student(request, studentid):
    try:
        return student_models.Student.objects.owned_by(request.account).get(id=studentid)
    except student_models.Student.DoesNotExist:
        return None


def _method_not_allowed():
    return JsonResponse({'success': False, 'error': 'Invalid request method.'}, status=405)


def _payment_json(payment):
    return {
        'id': payment.id,
        'date_of_payment': payment.date_of_payment.isoformat(),
        'payment_method': payment.payment_method,
        'month_paid_for': payment.month_paid_for,
        'month_label': format_month_id(payment.month_paid_for),
        'amount_paid': str(payment.amount_paid),
        'notes': payment.notes,
    }


def _due_json(info):
    return {
        'due_months': list(info.due_months),
        'due_months_count': info.due_months_count,
        'total_due_amount': str(info.total_due_amount),
        'fee_status_label': info.fee_status_label,
        'fee_status_type': info.fee_status_type,
        'is_error': info.is_error,
    }


@session_login_required
def Dashboard(request):
    user = request.account
    reference_date = _reference_date(request)
    students = student_models.Student.objects.owned_by(user).prefetch_related('payments')

    total_students = 0
    students_with_dues = 0
    total_due = Decimal('0')
    for student in students:
        info = _due_info(student, reference_date)
        total_students += 1
        if info.total_due_amount > 0:
            students_with_dues += 1
        total_due += info.total_due_amount

    total_paid = student_models.Payment.objects.filter(
        student__owner=user
    ).aggregate(s=Sum('amount_paid'))['s'] or Decimal('0')

    context = {
        'user': user,
        'total_students': total_students,
        'students_with_dues': students_with_dues,
        'total_paid': total_paid,
        'total_due': total_due,
        'currency': settings.CURRENCY_SYMBOL,
    }
    return render(request, 'Students/Dashboard.html', context)


@session_login_required
def Students(request):
    user = request.account
    reference_date = _reference_date(request)
    q = (request.GET.get('q') or '').strip()

    students = student_models.Student.objects.owned_by(user).prefetch_related('payments')
    if q:
        students = students.filter(Q(full_name__icontains=q) | Q(father_name__icontains=q))

    rows = [{'student': s, 'dues': _due_info(s, reference_date)} for s in students]

    context = {
        'user': user,
        'rows': rows,
        'q': q,
        'currency': settings.CURRENCY_SYMBOL,
    }
    return render(request, 'Students/Students.html', context)


@session_login_required
def AddStudent(request):
    user = request.account

    if request.method == 'POST':
        form = StudentForm(request.POST, request.FILES)
        if form.is_valid():
            student = form.save(commit=False)
            student.owner = user
            student.sort_order = student_models.Student.objects.next_sort_order(user)
            student.save()
            logger.info("Student %s added by %s", student.id, user.email)
            messages.success(request, f'{student.full_name} has been added.')
            return redirect('Students')
    else:
        form = StudentForm(initial={'monthly_fee': settings.DEFAULT_MONTHLY_FEE, 'admission_date': date.today()})

    return render(request, 'Students/AddStudent.html', {'form': form, 'user': user})


@session_login_required
def StudentView(request, studentid):
    user = request.account
    student = _get_owned_student(request, studentid)
    if student is None:
        messages.error(request, f'Student with ID {studentid} does not exist.')
        return redirect('Students')

    old_photo = student.profile_photo.path if student.profile_photo else None

    if request.method == 'POST':
        form = StudentForm(request.POST, request.FILES, instance=student)
        if form.is_valid():
            if 'profile_photo' in request.FILES and old_photo and os.path.exists(old_photo):
                os.remove(old_photo)
            form.save()
            messages.success(request, f"{student.full_name}'s details updated.")
            return redirect('StudentView', studentid=student.id)
    else:
        form = StudentForm(instance=student)

    reference_date = _reference_date(request)
    month_options = student.payable_months(reference_date)
    dues = _due_info(student, reference_date)
    context = {
        'user': user,
        'student': student,
        'form': form,
        'dues': dues,
        'due_month_labels': [format_month_id(m) for m in dues.due_months],
        'payments': student.payments.all(),
        'payment_form': PaymentForm(month_options=month_options, initial={
            'date_of_payment': date.today(),
            'amount_paid': student.effective_monthly_fee,
        }),
        'currency': settings.CURRENCY_SYMBOL,
    }
    return render(request, 'Students/StudentView.html', context)


@session_login_required
def DeleteStudent(request, studentid):
    if request.method != 'POST':
        return redirect('Students')

    student = _get_owned_student(request, studentid)
    if student is None:
        messages.error(request, f'Student with ID {studentid} does not exist.')
        return redirect('Students')

    student_name = student.full_name
    if student.profile_photo and os.path.exists(student.profile_photo.path):
        os.remove(student.profile_photo.path)

    # Payments go with the student (on_delete=CASCADE)
    student.delete()
    logger.info("Student %s deleted by %s", studentid, request.account.email)

    messages.success(request, f'Student {student_name} has been successfully deleted.')
    return redirect('Students')


@session_login_required
def reorder_students(request):
    if request.method != 'POST':
        return _method_not_allowed()

    try:
        payload = json.loads(request.body or b'{}')
        order = payload['order']
        if not isinstance(order, list):
            raise TypeError('order must be a list')
        updated = student_models.Student.objects.reorder(request.account, order)
    except (ValueError, KeyError, TypeError) as e:
        return JsonResponse({'success': False, 'error': f'Invalid ordering: {e}'}, status=400)
    except student_models.Student.DoesNotExist:
        return JsonResponse({'success': False, 'error': 'Student not found.'}, status=404)

    return JsonResponse({'success': True, 'updated': updated})


@session_login_required
def payable_months(request, studentid):
    student = _get_owned_student(request, studentid)
    if student is None:
        return JsonResponse({'success': False, 'error': 'Student not found.'}, status=404)

    options = student.payable_months(_reference_date(request))
    return JsonResponse({
        'success': True,
        'months': [{'value': o.month_id, 'label': o.display_label} for o in options],
    })


@session_login_required
def student_dues(request, studentid):
    student = _get_owned_student(request, studentid)
    if student is None:
        return JsonResponse({'success': False, 'error': 'Student not found.'}, status=404)
    return JsonResponse({'success': True, 'dues': _due_json(_due_info(student, _reference_date(request)))})


@session_login_required
def add_payment(request, studentid):
    if request.method != 'POST':
        return _method_not_allowed()

    student = _get_owned_student(request, studentid)
    if student is None:
        return JsonResponse({'success': False, 'error': 'Student not found.'}, status=404)

    form = PaymentForm(request.POST)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors}, status=400)

    payment = form.save(commit=False)
    payment.student = student
    payment.recorded_by = request.account
    payment.save()
    logger.info("Payment of %s for %s recorded for student %s", payment.amount_paid, payment.month_paid_for, student.id)

    return JsonResponse({
        'success': True,
        'message': f'Payment of {settings.CURRENCY_SYMBOL}{payment.amount_paid} for '
                   f'{format_month_id(payment.month_paid_for)} recorded.',
        'payment': _payment_json(payment),
        'dues': _due_json(_due_info(student, date.today())),
    })


@session_login_required
def edit_payment(request, studentid, paymentid):
    if request.method != 'POST':
        return _method_not_allowed()

    student = _get_owned_student(request, studentid)
    if student is None:
        return JsonResponse({'success': False, 'error': 'Student not found.'}, status=404)
    try:
        payment = student.payments.get(id=paymentid)
    except student_models.Payment.DoesNotExist:
        return JsonResponse({'success': False, 'error': 'Payment not found.'}, status=404)

    form = PaymentForm(request.POST, instance=payment)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors}, status=400)

    payment = form.save()
    return JsonResponse({
        'success': True,
        'message': f'Payment for {format_month_id(payment.month_paid_for)} updated.',
        'payment': _payment_json(payment),
        'dues': _due_json(_due_info(student, date.today())),
    })


@session_login_required
def delete_payment(request, studentid, paymentid):
    if request.method != 'POST':
        return _method_not_allowed()

    student = _get_owned_student(request, studentid)
    if student is None:
        return JsonResponse({'success': False, 'error': 'Student not found.'}, status=404)

    deleted, _ = student.payments.filter(id=paymentid).delete()
    if not deleted:
        return JsonResponse({'success': False, 'error': 'Payment not found.'}, status=404)

    logger.info("Payment %s removed from student %s", paymentid, student.id)
    return JsonResponse({
        'success': True,
        'message': 'The payment record has been removed.',
        'dues': _due_json(_due_info(student, date.today())),
    })


@session_login_required
def student_statement_pdf(request, studentid):
    student = _get_owned_student(request, studentid)
    if student is None:
        messages.error(request, f'Student with ID {studentid} does not exist.')
        return redirect('Students')

    reference_date = _reference_date(request)
    dues = _due_info(student, reference_date)
    payments = list(student.payments.all())
    currency = settings.CURRENCY_SYMBOL

    response = HttpResponse(content_type='application/pdf')
    response['Content-Disposition'] = f'attachment; filename="fee_statement_{student.id}.pdf"'

    pdf = canvas.Canvas(response, pagesize=A4)
    width, height = A4

    pdf.setFont("Helvetica-Bold", 16)
    title = "Fee Statement"
    title_width = pdf.stringWidth(title, "Helvetica-Bold", 16)
    pdf.drawString((width - title_width) / 2, height - 50, title)

    pdf.setFont("Helvetica", 11)
    y = height - 85
    for line in [
        f"Student: {student.full_name}",
        f"Father's Name: {student.father_name}",
        f"Class: {student.class_name}",
        f"Admission Date: {student.admission_date.strftime('%d-%m-%Y')}",
        f"Monthly Fee: {currency} {student.effective_monthly_fee:,.2f}",
        f"Status as of {reference_date}: {dues.fee_status_label}",
        f"Total Due: {currency} {dues.total_due_amount:,.2f}",
    ]:
        pdf.drawString(50, y, line)
        y -= 18

    if dues.due_months:
        y -= 10
        pdf.setFont("Helvetica-Bold", 12)
        pdf.drawString(50, y, "Unpaid Months")
        y -= 18
        pdf.setFont("Helvetica", 11)
        pdf.drawString(50, y, ", ".join(format_month_id(m) for m in dues.due_months)[:110])
        y -= 18

    y -= 20
    pdf.setFont("Helvetica-Bold", 12)
    pdf.drawString(50, y, "Payment History")
    y -= 10

    if not payments:
        pdf.setFont("Helvetica", 11)
        pdf.drawString(50, y - 15, "No payments recorded.")
    else:
        row_height = 20
        rows_per_page = max(1, int((y - 60) // row_height) - 1)
        header = ["Date", "Month Paid For", "Method", "Amount"]
        chunks = [payments[i:i + rows_per_page] for i in range(0, len(payments), rows_per_page)]

        for chunk_index, chunk in enumerate(chunks):
            if chunk_index > 0:
                pdf.showPage()
                y = height - 50

            table_data = [header] + [
                [
                    p.date_of_payment.strftime('%d-%m-%Y'),
                    format_month_id(p.month_paid_for),
                    p.payment_method,
                    f"{currency} {p.amount_paid:,.2f}",
                ]
                for p in chunk
            ]
            table = Table(table_data, colWidths=[100, 150, 100, 120], rowHeights=[row_height] * len(table_data))
            table.setStyle(TableStyle([
                ('BACKGROUND', (0, 0), (-1, 0), colors.grey),
                ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
                ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
                ('FONTNAME', (0, 1), (-1, -1), 'Helvetica'),
                ('FONTSIZE', (0, 0), (-1, -1), 10),
                ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
                ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
                ('GRID', (0, 0), (-1, -1), 1, colors.black),
            ]))
            table.wrapOn(pdf, width - 100, height)
            table.drawOn(pdf, 50, y - len(table_data) * row_height)

    pdf.setFont("Helvetica", 9)
    footer = f"Statement Generated on: {date.today().strftime('%d-%m-%Y')}"
    footer_width = pdf.stringWidth(footer, "Helvetica", 9)
    pdf.drawString((width - footer_width) / 2, 30, footer)

    pdf.save()
    return response
