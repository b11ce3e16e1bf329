from django import forms
from Students.models import Student, Payment
from .dues import parse_month_id

class StudentForm(forms.ModelForm):
    class Meta:
        model = Student
        fields = ['full_name', 'father_name', 'class_name', 'mobile_number', 'admission_date',
                  'monthly_fee', 'profile_photo', 'student_notes']
        widgets = {
            'full_name': forms.TextInput(attrs={'class': 'form-control'}),
            'father_name': forms.TextInput(attrs={'class': 'form-control'}),
            'class_name': forms.TextInput(attrs={'class': 'form-control'}),
            'mobile_number': forms.TextInput(attrs={'class': 'form-control', 'placeholder': '10 digit number'}),
            'admission_date': forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
            'monthly_fee': forms.NumberInput(attrs={'class': 'form-control'}),
            'student_notes': forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Admission date is fixed once the student exists
        if self.instance.pk:
            self.fields['admission_date'].disabled = True

    def clean_full_name(self):
        full_name = (self.cleaned_data.get('full_name') or '').strip()
        if len(full_name) < 2:
            raise forms.ValidationError("Full name must be at least 2 characters.")
        return full_name

    def clean_father_name(self):
        father_name = (self.cleaned_data.get('father_name') or '').strip()
        if len(father_name) < 2:
            raise forms.ValidationError("Father's name must be at least 2 characters.")
        return father_name

    def clean_mobile_number(self):
        mobile_number = (self.cleaned_data.get('mobile_number') or '').strip()
        if not (mobile_number.isdigit() and len(mobile_number) == 10):
            raise forms.ValidationError("Mobile number must be 10 digits.")
        return mobile_number

    def clean_monthly_fee(self):
        fee = self.cleaned_data.get('monthly_fee')
        if fee is None or fee <= 0:
            raise forms.ValidationError("Monthly fee must be a positive amount.")
        return fee


class PaymentForm(forms.ModelForm):
    class Meta:
        model = Payment
        fields = ['date_of_payment', 'payment_method', 'month_paid_for', 'amount_paid', 'notes']
        widgets = {
            'date_of_payment': forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
            'payment_method': forms.Select(attrs={'class': 'form-select'}),
            'month_paid_for': forms.Select(attrs={'class': 'form-select'}),
            'amount_paid': forms.NumberInput(attrs={'class': 'form-control'}),
            'notes': forms.Textarea(attrs={'class': 'form-control', 'rows': 2}),
        }

    def __init__(self, *args, month_options=None, **kwargs):
        super().__init__(*args, **kwargs)
        if month_options is not None:
            self.fields['month_paid_for'].widget.choices = [
                (option.month_id, option.display_label) for option in month_options
            ]
        else:
            self.fields['month_paid_for'].widget = forms.TextInput(
                attrs={'class': 'form-control', 'placeholder': 'YYYY-MM'}
            )

    def clean_month_paid_for(self):
        month = (self.cleaned_data.get('month_paid_for') or '').strip()
        try:
            parse_month_id(month)
        except ValueError:
            raise forms.ValidationError("Month paid for is required (YYYY-MM).")
        return month

    def clean_amount_paid(self):
        amount = self.cleaned_data.get('amount_paid')
        if amount is None or amount <= 0:
            raise forms.ValidationError("Amount must be a positive number.")
        return amount
