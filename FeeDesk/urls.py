"""
URL configuration for FeeDesk project.
"""
from django.contrib import admin
from django.urls import path
from django.conf.urls.static import static
from django.conf import settings

# App Paths
from authentication import views
from Students import views as studentViews

urlpatterns = [
    path('admin/', admin.site.urls),
    path('', views.Login_Page, name='home'),
    path('logout/', views.Logout, name='logout'),
    path('dashboard/', studentViews.Dashboard, name='Dashboard'),
    path('Students/', studentViews.Students, name='Students'),
    path('Students/Add/', studentViews.AddStudent, name='AddStudent'),
    path('Students/Reorder/', studentViews.reorder_students, name='reorder_students'),
    path('Students/<int:studentid>/', studentViews.StudentView, name='StudentView'),
    path('Students/<int:studentid>/Delete/', studentViews.DeleteStudent, name='DeleteStudent'),
    path('Students/<int:studentid>/Dues/', studentViews.student_dues, name='student_dues'),
    path('Students/<int:studentid>/Statement/', studentViews.student_statement_pdf, name='student_statement_pdf'),
    path('Students/<int:studentid>/PayableMonths/', studentViews.payable_months, name='payable_months'),
    path('Students/<int:studentid>/Payments/Add/', studentViews.add_payment, name='add_payment'),
    path('Students/<int:studentid>/Payments/<int:paymentid>/Edit/', studentViews.edit_payment, name='edit_payment'),
    path('Students/<int:studentid>/Payments/<int:paymentid>/Delete/', studentViews.delete_payment, name='delete_payment'),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
