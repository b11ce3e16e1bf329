from django.contrib import admin
from .models import Student, Payment

class PaymentInline(admin.TabularInline):
    model = Payment
    extra = 0
    fields = ('date_of_payment', 'month_paid_for', 'amount_paid', 'payment_method', 'notes')

@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ('full_name', 'father_name', 'class_name', 'admission_date', 'monthly_fee', 'fee_status', 'sort_order')
    list_filter = ('class_name',)
    search_fields = ('full_name', 'father_name', 'mobile_number')
    ordering = ('owner', 'sort_order')
    inlines = [PaymentInline]

    def get_readonly_fields(self, request, obj=None):
        # admission date anchors the billing cycle and is fixed once saved
        if obj is not None:
            return ('admission_date',)
        return ()

    @admin.display(description='Fee status')
    def fee_status(self, obj):
        return obj.due_info().fee_status_label

@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ('student', 'month_paid_for', 'amount_paid', 'date_of_payment', 'payment_method')
    list_filter = ('payment_method',)
    search_fields = ('student__full_name', 'month_paid_for')
