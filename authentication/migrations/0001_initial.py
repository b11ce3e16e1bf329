import authentication.models
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='User',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('first_name', models.CharField(max_length=50)),
                ('last_name', models.CharField(max_length=50)),
                ('email', models.EmailField(max_length=254, unique=True)),
                ('password', models.CharField(max_length=128)),
                ('profile_photo', models.ImageField(blank=True, null=True, upload_to=authentication.models.profile_photo_path)),
                ('usertype', models.PositiveSmallIntegerField(choices=[(1, 'Admin'), (2, 'Accountant')], default=1)),
                ('status', models.CharField(choices=[('Active', 'Active'), ('Inactive', 'Inactive')], default='Active', max_length=10)),
                ('mobile_no', models.CharField(blank=True, max_length=15, null=True)),
                ('joining_date', models.DateField(blank=True, null=True)),
            ],
        ),
    ]
