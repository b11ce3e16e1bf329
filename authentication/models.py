import os
from django.contrib.auth.hashers import check_password, make_password
from django.db import models
from django.utils.text import slugify

def profile_photo_path(instance, filename):
    extension = filename.split('.')[-1]
    filename = f"{slugify(instance.first_name)}_{slugify(instance.last_name)}_{slugify(instance.email)}.{extension}"
    return os.path.join('user_profiles', filename)


class User(models.Model):
    USER_TYPE_CHOICES = [
        (1, 'Admin'),
        (2, 'Accountant'),
    ]

    STATUS_CHOICES = [
        ('Active', 'Active'),
        ('Inactive', 'Inactive'),
    ]

    first_name = models.CharField(max_length=50)
    last_name = models.CharField(max_length=50)
    email = models.EmailField(unique=True)
    password = models.CharField(max_length=128)
    profile_photo = models.ImageField(upload_to=profile_photo_path, blank=True, null=True)
    usertype = models.PositiveSmallIntegerField(choices=USER_TYPE_CHOICES, default=1)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='Active')
    mobile_no = models.CharField(max_length=15, blank=True, null=True)
    joining_date = models.DateField(null=True, blank=True)

    def set_password(self, raw_password):
        self.password = make_password(raw_password)

    def check_password(self, raw_password):
        return check_password(raw_password, self.password)

    @property
    def is_active(self):
        return self.status == 'Active'

    def __str__(self):
        return f"{self.first_name} {self.last_name}"
