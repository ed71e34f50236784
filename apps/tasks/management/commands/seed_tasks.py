from django.core.management.base import BaseCommand
from django.db import transaction

from apps.identity.models import User
from apps.identity.security import hash_password
from apps.identity.services import normalize_email
from apps.tasks.models import Priority, Task

DEMO_TASKS = [
    {'title': 'Set up project board', 'priority': Priority.HIGH, 'is_complete': True},
    {'title': 'Write onboarding notes', 'priority': Priority.MEDIUM},
    {'title': 'Review open pull requests', 'priority': Priority.HIGH},
    {'title': 'Clean up old branches', 'priority': Priority.LOW},
    {'title': 'Plan next sprint', 'priority': Priority.MEDIUM, 'description': 'Collect estimates first.'},
]


class Command(BaseCommand):
    help = 'Seeds a demo user with a handful of tasks for local development'

    def add_arguments(self, parser):
        parser.add_argument('--email', default='demo@example.com', help='Demo user email')
        parser.add_argument('--password', default='password123', help='Demo user password (new users only)')

    @transaction.atomic
    def handle(self, *args, **options):
        email = normalize_email(options['email'])

        user, created = User.objects.get_or_create(
            email=email,
            defaults={
                'password_hash': hash_password(options['password']),
                'first_name': 'Demo',
                'last_name': 'User',
            },
        )
        if created:
            self.stdout.write(self.style.SUCCESS(f'Created user: {email}'))
        else:
            self.stdout.write(self.style.WARNING(f'Using existing user: {email}'))

        if user.tasks.exists():
            self.stdout.write(self.style.WARNING(f'{email} already has tasks, nothing to seed'))
            return

        Task.objects.bulk_create([
            Task(
                user=user,
                title=item['title'],
                description=item.get('description', ''),
                priority=item['priority'],
                is_complete=item.get('is_complete', False),
                sort_order=index,
            )
            for index, item in enumerate(DEMO_TASKS)
        ])
        self.stdout.write(self.style.SUCCESS(f'Created {len(DEMO_TASKS)} tasks for {email}'))
