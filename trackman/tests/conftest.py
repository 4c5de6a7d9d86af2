"""
Pytest fixtures for Trackman tests.
"""

from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from trackman import lifecycle
from trackman.models import Company, Product, ProductStatus


User = get_user_model()


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        username='operador',
        email='operador@armazem.pt',
        password='testpass123',
        first_name='Ana',
        last_name='Costa',
    )


@pytest.fixture
def company(db):
    """Create a test tenant."""
    return Company.objects.create(name='Armazém Central')


@pytest.fixture
def other_company(db):
    """Create a second tenant."""
    return Company.objects.create(name='Logística Norte')


@pytest.fixture
def product(db, company, user):
    """Receive a product through the lifecycle service (status RECEIVED)."""
    return lifecycle.receive(
        company,
        internal_code='PAL-0001',
        description='Palete de azulejos',
        quantity=Decimal('12'),
        unit='cx',
        user=user,
        location='Cais 1',
    )


@pytest.fixture
def make_product(db, company):
    """Factory: product already sitting at a given status (no ledger)."""
    counter = {'n': 0}

    def _make(status=ProductStatus.RECEIVED, location='Corredor A', quantity=Decimal('5')):
        counter['n'] += 1
        return Product.objects.create(
            company=company,
            internal_code=f'SKU-{counter["n"]:04d}',
            description='Caixa de parafusos',
            quantity=quantity,
            unit='un',
            current_location=location,
            status=status,
        )

    return _make
