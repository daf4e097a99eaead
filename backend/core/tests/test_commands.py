# backend/core/tests/test_commands.py
import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command

from apps.products.models import Product, ProductVariant

User = get_user_model()

@pytest.mark.django_db
class TestSeedDemo:

    def test_seed_creates_demo_data(self):
        call_command('seed_demo')

        assert User.objects.filter(email='admin@ecommerce.com', role='admin').exists()
        assert Product.objects.count() == 3
        assert ProductVariant.objects.count() == 6

    def test_seed_is_idempotent(self):
        """Correr el comando dos veces no duplica datos"""
        call_command('seed_demo')
        call_command('seed_demo')

        assert Product.objects.count() == 3
        assert User.objects.filter(email='cliente@ecommerce.com').count() == 1
