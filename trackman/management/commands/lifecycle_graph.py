"""
Management command to print the product status graph.

Usage:
    python manage.py lifecycle_graph
    python manage.py lifecycle_graph --status IN_ANALYSIS
"""

from django.core.management.base import BaseCommand

from trackman import lifecycle
from trackman.models import ProductStatus


class Command(BaseCommand):
    """Print legal transitions and their policies."""

    help = 'Mostra as transições de status permitidas e os seus requisitos'

    def add_arguments(self, parser):
        parser.add_argument(
            '--status',
            choices=ProductStatus.values,
            help='Mostra apenas as transições a partir deste status'
        )

    def handle(self, *args, **options):
        if options['status']:
            statuses = [ProductStatus(options['status'])]
        else:
            statuses = list(ProductStatus)

        for status in statuses:
            if lifecycle.is_final(status):
                self.stdout.write(self.style.WARNING(f'{status.value} (final)'))
                continue

            self.stdout.write(status.value)
            for target in lifecycle.next_possible_states(status):
                self.stdout.write(f'  → {target.value}{self._describe(status, target)}')

    def _describe(self, source, target):
        policy = lifecycle.policy_for(source, target)
        notes = []
        if policy.requires_admin_role:
            notes.append('admin')
        if policy.required:
            notes.append('campos: ' + ', '.join(policy.required))
        if not notes:
            return ''
        return f" [{'; '.join(notes)}]"
