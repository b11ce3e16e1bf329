from django.core.management.base import BaseCommand
from authentication.models import User
from Students.models import Student

class Command(BaseCommand):
    help = 'Renumber student roster sort orders that are missing or duplicated'

    def handle(self, *args, **options):
        owners = User.objects.filter(students__isnull=False).distinct()

        self.stdout.write(f'Found {owners.count()} rosters')

        total_updated = 0
        for owner in owners:
            updated = Student.objects.normalize_sort_order(owner)
            if updated:
                self.stdout.write(f'  {owner.email}: renumbered {updated} students')
            total_updated += updated

        self.stdout.write(
            self.style.SUCCESS(f'\nSuccessfully updated {total_updated} students')
        )
